from gstradelink.app.common.lockout import LOCKOUT_SECONDS, STORAGE_KEY
from conftest import ADMIN_PASSWORD, login


def _lockout_state(client):
    with client.session_transaction() as sess:
        return sess.get(STORAGE_KEY)


# AUTH-001: correct credentials start a session and land on the dashboard
def test_login_success_redirects_to_dashboard(client, admin):
    r = login(client)
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/admin")

    r = client.get("/admin")
    assert r.status_code == 200
    assert b"Add product" in r.data


# AUTH-002: wrong password gives the normalized message
def test_wrong_password_is_normalized(client, admin, clock):
    r = login(client, password="nope", follow_redirects=True)
    assert b"Incorrect email or password." in r.data
    assert _lockout_state(client)["attempts"] == 1


# AUTH-003: unknown email gives the same message
def test_unknown_email_is_normalized(client, admin, clock):
    r = login(client, email="someone@else.com", follow_redirects=True)
    assert b"Incorrect email or password." in r.data


# AUTH-004: five failures lock the form, even for the right password
def test_five_failures_lock_out(client, admin, clock):
    for _ in range(4):
        r = login(client, password="wrong", follow_redirects=True)
        assert b"Incorrect email or password." in r.data

    r = login(client, password="wrong", follow_redirects=True)
    assert b"Too many requests" in r.data
    assert b"15:00" in r.data

    r = login(client, password=ADMIN_PASSWORD, follow_redirects=True)
    assert b"Too many requests" in r.data
    assert b"Login to Dashboard" in r.data

    # still not signed in
    r = client.get("/admin")
    assert r.status_code == 302
    assert "/admin/login" in r.headers["Location"]


# AUTH-005: the login page shows the countdown and disables the button while locked
def test_login_page_shows_countdown(client, admin, clock):
    for _ in range(5):
        login(client, password="wrong")

    clock.advance(LOCKOUT_SECONDS - 61)
    r = client.get("/admin/login")
    assert b"01:01" in r.data
    assert b"data-locked-until=" in r.data
    assert b"disabled" in r.data


# AUTH-006: after fifteen minutes the lock lifts and the counter starts over
def test_lock_expires(client, admin, clock):
    for _ in range(5):
        login(client, password="wrong")

    clock.advance(LOCKOUT_SECONDS)
    r = login(client)
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/admin")
    assert _lockout_state(client) is None


# AUTH-007: a successful login resets the counter
def test_success_resets_counter(client, admin, clock):
    for _ in range(3):
        login(client, password="wrong")
    assert _lockout_state(client)["attempts"] == 3

    login(client)
    assert _lockout_state(client) is None

    client.post("/admin/logout")
    for _ in range(4):
        r = login(client, password="wrong", follow_redirects=True)
    assert b"Incorrect email or password." in r.data


# AUTH-008: next is honoured for admin paths only
def test_next_path_is_limited_to_admin(client, admin):
    r = client.post(
        "/admin/login?next=/admin/products/abc/edit",
        data={"email": "admin@gstradelink.com.np", "password": ADMIN_PASSWORD},
    )
    assert r.headers["Location"].endswith("/admin/products/abc/edit")

    client.post("/admin/logout")
    r = client.post(
        "/admin/login",
        data={"email": "admin@gstradelink.com.np", "password": ADMIN_PASSWORD, "next": "https://evil.example/"},
    )
    assert r.headers["Location"].endswith("/admin")


# AUTH-009: logout clears the session and the auth cookie
def test_logout(client, admin):
    login(client)
    r = client.post("/admin/logout")
    assert r.status_code == 302
    assert client.get_cookie("gst-test-auth-token") is None

    r = client.get("/admin")
    assert r.status_code == 302
