"""Business details, category metadata and the marketing copy used by the pages."""

from __future__ import annotations

from urllib.parse import quote, urlencode

BUSINESS = {
    "name": "GSTradeLink",
    "tagline": "Weighing scales, spare parts and service",
    "city": "Bharatpur",
    "region": "Chitwan",
    "country": "Nepal",
    "phone": "+977 56-878965",
    "phone_href": "tel:+97756878965",
    "mobile": "+977 976-5662427",
    "mobile_href": "tel:+9779765662427",
    "email": "info@gstradelink.com.np",
    "whatsapp_number": "9779765662427",
}

# Catalogue filter order. "All" is the unfiltered view.
PRODUCT_CATEGORIES = [
    "All",
    "Precision & Pocket Mini Scales",
    "Kitchen & Compact Tabletop Scales",
    "Portable & Luggage Scales",
    "Heavy-Duty Hanging & Crane Scales",
    "Personal Health & Bathroom Scales",
    "Packaging & Miscellaneous Equipment",
]

CATEGORY_LABELS = {
    "All": "All",
    "Precision & Pocket Mini Scales": "Precision",
    "Kitchen & Compact Tabletop Scales": "Kitchen",
    "Portable & Luggage Scales": "Luggage",
    "Heavy-Duty Hanging & Crane Scales": "Industrial",
    "Personal Health & Bathroom Scales": "Health & Baby",
    "Packaging & Miscellaneous Equipment": "Packaging",
    "Service": "Repair & Service",
    # older catalogue rows
    "Retail Scale": "Retail",
    "Industrial Scale": "Industrial",
    "Spare Part": "Spare Parts",
}

# Options offered by the admin form before any custom categories exist
ADMIN_CATEGORIES = [c for c in PRODUCT_CATEGORIES if c != "All"] + ["Service"]

SEARCH_MAX_LENGTH = 60


def category_label(category: str | None) -> str:
    if not category:
        return ""
    return CATEGORY_LABELS.get(category, category)


def normalize_category(value: str | None) -> str:
    if not value:
        return "All"
    wanted = value.strip().lower()
    for category in PRODUCT_CATEGORIES:
        if category.lower() == wanted:
            return category
    return "All"


def normalize_search(value: str | None) -> str:
    return (value or "").strip()[:SEARCH_MAX_LENGTH]


def category_href(category: str, query: str = "") -> str:
    params = {}
    if category != "All":
        params["category"] = category
    if query:
        params["q"] = query
    return f"/products?{urlencode(params)}" if params else "/products"


def category_chips(query: str = "") -> list[dict]:
    chips = [
        {"category": c, "label": CATEGORY_LABELS[c], "href": category_href(c, query), "is_service": False}
        for c in PRODUCT_CATEGORIES
    ]
    chips.append({"category": "services-link", "label": "Services", "href": "/services", "is_service": True})
    return chips


def whatsapp_link(message: str = "") -> str:
    base = f"https://wa.me/{BUSINESS['whatsapp_number']}"
    if not message:
        return base
    return f"{base}?text={quote(message)}"


def product_enquiry_message(product_name: str) -> str:
    return (
        f"Hello GSTradeLink! I'm interested in the {product_name}. "
        "Could you please share availability and pricing?"
    )


NAV_ITEMS = [
    {"label": "Home", "href": "/"},
    {
        "label": "Products",
        "href": "/products",
        "children": [
            {"label": "All Products", "href": "/products"},
            {"label": "Precision Scales", "href": category_href("Precision & Pocket Mini Scales")},
            {"label": "Kitchen Scales", "href": category_href("Kitchen & Compact Tabletop Scales")},
            {"label": "Luggage Scales", "href": category_href("Portable & Luggage Scales")},
            {"label": "Industrial & Crane Scales", "href": category_href("Heavy-Duty Hanging & Crane Scales")},
            {"label": "Health & Baby", "href": category_href("Personal Health & Bathroom Scales")},
        ],
    },
    {"label": "Services", "href": "/services"},
    {"label": "Contact", "href": "/contact"},
]

BRANDS = ["Camry", "A&D", "CAS", "Mettler Toledo", "Ohaus", "Kern", "Xin Yuan", "Essae"]

MAIN_SERVICES = [
    {
        "title": "Scale Repair",
        "subtitle": "All Brands & Models",
        "description": "Expert diagnosis and repair for digital scales, beam balances, "
        "platform scales, and industrial weighing systems.",
        "features": [
            "Load cell replacement & repair",
            "Display & indicator repair",
            "PCB & electronic repairs",
            "Mechanical parts replacement",
        ],
        "wa_message": "Hello GSTradeLink! I need repair service for my weighing scale. Can you help?",
    },
    {
        "title": "OIML Calibration",
        "subtitle": "Certified & Legal",
        "description": "Government-recognized calibration certificates accepted by legal "
        "metrology and commercial authorities.",
        "features": [
            "OIML-compliant calibration",
            "Legal metrology certificates",
            "Traceability documentation",
            "Annual calibration contracts",
        ],
        "wa_message": "Hello GSTradeLink! I need OIML calibration for my weighing equipment. "
        "Please provide details.",
    },
    {
        "title": "Preventive Maintenance",
        "subtitle": "Keep Scales Accurate",
        "description": "Regular maintenance programs to prevent breakdowns, extend equipment "
        "life, and maintain accuracy.",
        "features": [
            "Scheduled inspections",
            "Cleaning & adjustment",
            "Performance testing",
            "Detailed maintenance reports",
        ],
        "wa_message": "Hello GSTradeLink! I'm interested in preventive maintenance for my scales. "
        "Can you share more info?",
    },
]

ADDITIONAL_SERVICES = [
    {"title": "Spare Parts", "description": "Genuine components for all major brands"},
    {"title": "On-Site Service", "description": "We come to your location across Chitwan"},
    {"title": "AMC Contracts", "description": "Annual coverage with priority support"},
]

STATS = [
    {"value": "8+", "label": "Years"},
    {"value": "500+", "label": "Scales Serviced"},
    {"value": "24h", "label": "Response"},
    {"value": "100%", "label": "Satisfaction"},
]

PROCESS_STEPS = [
    {"step": "01", "title": "Contact", "description": "Reach out via WhatsApp or phone"},
    {"step": "02", "title": "Diagnosis", "description": "We assess and provide a quote"},
    {"step": "03", "title": "Service", "description": "Repair with genuine parts"},
    {"step": "04", "title": "Delivery", "description": "Collect or we deliver to you"},
]

WA_TEMPLATES = [
    {
        "label": "Enquire about a product",
        "sub": "Ask about availability & pricing",
        "msg": "Hello GSTradeLink! I'm looking for a weighing scale. Could you help me find the right one?",
    },
    {
        "label": "Book a repair / service",
        "sub": "Scale repair or calibration",
        "msg": "Hello GSTradeLink! My weighing scale needs repair/calibration. Can you help me?",
    },
    {
        "label": "Request a price quote",
        "sub": "Bulk order or custom requirement",
        "msg": "Hello GSTradeLink! I'd like a price quote for weighing equipment. Please share the details.",
    },
    {
        "label": "Spare parts enquiry",
        "sub": "Genuine replacement parts",
        "msg": "Hello GSTradeLink! I need a spare part for my weighing scale. Can you help?",
    },
]

# Indexed like Python's date.weekday(): Monday == 0
HOURS = [
    {"day": "Monday", "time": "Closed", "open": False},
    {"day": "Tuesday", "time": "10:00 AM – 6:00 PM", "open": True},
    {"day": "Wednesday", "time": "10:00 AM – 6:00 PM", "open": True},
    {"day": "Thursday", "time": "10:00 AM – 6:00 PM", "open": True},
    {"day": "Friday", "time": "10:00 AM – 6:00 PM", "open": True},
    {"day": "Saturday", "time": "10:00 AM – 6:00 PM", "open": True},
    {"day": "Sunday", "time": "10:00 AM – 6:00 PM", "open": True},
]


def local_business_schema() -> dict:
    return {
        "@context": "https://schema.org",
        "@type": "LocalBusiness",
        "name": BUSINESS["name"],
        "description": BUSINESS["tagline"],
        "telephone": BUSINESS["mobile"],
        "email": BUSINESS["email"],
        "address": {
            "@type": "PostalAddress",
            "addressLocality": BUSINESS["city"],
            "addressRegion": BUSINESS["region"],
            "addressCountry": "NP",
        },
    }


def product_schema(product) -> dict:
    schema = {
        "@context": "https://schema.org",
        "@type": "Product",
        "name": product.name,
        "category": product.category,
        "description": product.short_description or "",
        "brand": {"@type": "Organization", "name": BUSINESS["name"]},
    }
    if product.image_url:
        schema["image"] = product.image_url
    return schema
