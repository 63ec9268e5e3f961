from artune.modules.onboarding import registry
from conftest import make_user

BASE = "/api/v1/onboarding/artist"


def submit_basic(client, headers, display_name="Jane Doe", location="Austin, TX"):
    return client.post(f"{BASE}/basic-info", headers=headers,
                       json={"display_name": display_name, "location": location})


def submit_details(client, headers, **fields):
    payload = {"bio": "Jazz pianist", "years_experience": "5", "hourly_rate": "75.50"}
    payload.update(fields)
    return client.post(f"{BASE}/professional-details", headers=headers, json=payload)


def test_requires_login(client):
    res = client.get(BASE)
    assert res.status_code == 401
    assert res.json()["redirect_to"] == "/login"


def test_clients_are_sent_to_dashboard(client, client_user):
    _, headers = client_user
    res = client.get(BASE, headers=headers)
    assert res.status_code == 403
    assert res.json()["redirect_to"] == "/dashboard"


def test_initial_state(client, artist):
    _, headers = artist
    res = client.get(BASE, headers=headers)
    assert res.status_code == 200
    body = res.json()
    assert body["current_step"] == 1
    assert body["total_steps"] == 3
    assert [s["title"] for s in body["steps"]] == [
        "Basic Information", "Professional Details", "Services"
    ]
    assert not any(s["completed"] for s in body["steps"])


def test_step1_creates_profile_with_defaults(client, supabase, artist):
    user, headers = artist
    res = submit_basic(client, headers)
    assert res.status_code == 200
    assert res.json()["current_step"] == 2

    rows = supabase.tables["artist_profiles"]
    assert len(rows) == 1
    assert rows[0]["user_id"] == user.id
    assert rows[0]["display_name"] == "Jane Doe"
    assert rows[0]["location"] == "Austin, TX"
    assert rows[0]["availability_status"] == "available"
    assert rows[0]["verified"] is False


def test_step1_uses_single_upsert(client, supabase, artist):
    _, headers = artist
    submit_basic(client, headers)
    writes = [c for c in supabase.calls if c[0] == "artist_profiles" and c[1] != "select"]
    assert writes == [("artist_profiles", "upsert")]


def test_step1_updates_existing_profile(client, supabase, artist):
    user, headers = artist
    supabase.add_row("artist_profiles", {
        "user_id": user.id, "display_name": "Old Name", "location": "Dallas, TX",
        "bio": "kept", "verified": True,
    })
    res = submit_basic(client, headers, display_name="New Name", location="Austin, TX")
    assert res.status_code == 200

    rows = supabase.tables["artist_profiles"]
    assert len(rows) == 1
    assert rows[0]["display_name"] == "New Name"
    assert rows[0]["location"] == "Austin, TX"
    assert rows[0]["bio"] == "kept"
    assert rows[0]["verified"] is True


def test_step1_twice_never_duplicates(client, supabase, artist):
    _, headers = artist
    submit_basic(client, headers)
    client.post(f"{BASE}/back", headers=headers)
    submit_basic(client, headers, display_name="Jane D.")
    rows = supabase.tables["artist_profiles"]
    assert len(rows) == 1
    assert rows[0]["display_name"] == "Jane D."


def test_step1_requires_display_name(client, supabase, artist):
    _, headers = artist
    res = submit_basic(client, headers, display_name="   ")
    assert res.status_code == 422
    assert res.json()["detail"] == "Display name is required"
    assert supabase.tables["artist_profiles"] == []


def test_step1_empty_location_is_null(client, supabase, artist):
    _, headers = artist
    submit_basic(client, headers, location="")
    assert supabase.tables["artist_profiles"][0]["location"] is None


def test_step1_rejects_non_artist_profile_row(client, supabase):
    # identity says artist, but the profiles row was never written
    _, headers = make_user(supabase, "ghost@test.com", "artist", with_profile=False)
    res = submit_basic(client, headers)
    assert res.status_code == 403
    assert supabase.tables["artist_profiles"] == []


def test_step1_remote_failure_keeps_step(client, supabase, artist):
    _, headers = artist
    supabase.fail("artist_profiles", "upsert", "network error")
    res = submit_basic(client, headers)
    assert res.status_code == 500
    assert res.json()["detail"] == "network error"
    state = client.get(BASE, headers=headers).json()
    assert state["current_step"] == 1
    assert state["draft"]["display_name"] == "Jane Doe"


def test_step2_parses_numbers(client, supabase, artist):
    _, headers = artist
    submit_basic(client, headers)
    res = submit_details(client, headers)
    assert res.status_code == 200
    assert res.json()["current_step"] == 3
    row = supabase.tables["artist_profiles"][0]
    assert row["bio"] == "Jazz pianist"
    assert row["years_experience"] == 5
    assert row["hourly_rate"] == 75.5


def test_step2_empty_strings_are_absent(client, supabase, artist):
    _, headers = artist
    submit_basic(client, headers)
    res = submit_details(client, headers, years_experience="", hourly_rate="")
    assert res.status_code == 200
    row = supabase.tables["artist_profiles"][0]
    assert row["years_experience"] is None
    assert row["hourly_rate"] is None


def test_step2_rejects_negative_rate(client, supabase, artist):
    _, headers = artist
    submit_basic(client, headers)
    res = submit_details(client, headers, hourly_rate="-10")
    assert res.status_code == 422
    assert res.json()["detail"] == "Hourly rate cannot be negative"


def test_step2_rejects_fractional_years(client, artist):
    _, headers = artist
    submit_basic(client, headers)
    res = submit_details(client, headers, years_experience="2.5")
    assert res.status_code == 422
    assert res.json()["detail"] == "Years of experience must be a whole number"


def test_steps_must_be_submitted_in_order(client, supabase, artist):
    _, headers = artist
    res = submit_details(client, headers)
    assert res.status_code == 409
    assert "step 1" in res.json()["detail"]
    assert ("artist_profiles", "update") not in supabase.calls


def test_step2_after_wizard_lost(client, supabase, artist):
    # a restart or expiry drops the in-memory wizard between steps
    user, headers = artist
    submit_basic(client, headers)
    registry.clear()
    res = submit_details(client, headers)
    assert res.status_code == 200
    assert res.json()["current_step"] == 3
    row = supabase.tables["artist_profiles"][0]
    assert row["user_id"] == user.id
    assert row["bio"] == "Jazz pianist"


def test_resumed_state_uses_stored_profile(client, supabase, artist):
    user, headers = artist
    supabase.add_row("artist_profiles", {
        "user_id": user.id, "display_name": "Jane Doe", "location": None, "bio": "Jazz pianist",
    })
    body = client.get(BASE, headers=headers).json()
    assert body["current_step"] == 2
    assert body["steps"][0]["completed"] is True
    assert body["draft"] == {"display_name": "Jane Doe", "bio": "Jazz pianist"}


def test_resume_lookup_failure(client, supabase, artist):
    _, headers = artist
    supabase.fail("artist_profiles", "select", "connection refused")
    res = client.get(BASE, headers=headers)
    assert res.status_code == 500
    assert res.json()["detail"] == "connection refused"


def test_resubmitting_basic_info_keeps_progress(client, supabase, artist):
    _, headers = artist
    submit_basic(client, headers)
    submit_details(client, headers)
    res = submit_basic(client, headers, display_name="Jane D.")
    assert res.status_code == 200
    assert res.json()["current_step"] == 3
    assert supabase.tables["artist_profiles"][0]["display_name"] == "Jane D."


def test_back_keeps_draft(client, artist):
    _, headers = artist
    submit_basic(client, headers)
    res = client.post(f"{BASE}/back", headers=headers)
    assert res.status_code == 200
    body = res.json()
    assert body["current_step"] == 1
    assert body["draft"] == {"display_name": "Jane Doe", "location": "Austin, TX"}


def test_back_from_first_step_conflicts(client, artist):
    _, headers = artist
    res = client.post(f"{BASE}/back", headers=headers)
    assert res.status_code == 409


def test_step3_creates_service_and_completes(client, supabase, artist):
    _, headers = artist
    submit_basic(client, headers)
    submit_details(client, headers)
    res = client.post(f"{BASE}/services", headers=headers, json={
        "category": "Live Performance", "title": "Wedding Performance", "price": "500.00"
    })
    assert res.status_code == 200
    body = res.json()
    assert body["complete"] is True
    assert body["redirect_to"] == "/dashboard"
    assert all(s["completed"] for s in body["steps"])

    profile = supabase.tables["artist_profiles"][0]
    services = supabase.tables["artist_services"]
    assert len(services) == 1
    assert services[0]["artist_id"] == profile["id"]
    assert services[0]["price"] == 500.0
    assert services[0]["price_type"] == "fixed"

    # wizard is dropped once complete; a later visit edits the stored profile
    state = client.get(BASE, headers=headers).json()
    assert state["current_step"] == 2
    assert state["complete"] is False


def test_step3_without_profile_fails(client, supabase, artist):
    user, headers = artist
    submit_basic(client, headers)
    submit_details(client, headers)
    # profile vanished between steps
    supabase.tables["artist_profiles"].clear()
    res = client.post(f"{BASE}/services", headers=headers, json={
        "category": "Live Performance", "title": "Wedding Performance", "price": ""
    })
    assert res.status_code == 404
    assert res.json()["detail"] == "Artist profile not found"
    assert supabase.tables["artist_services"] == []
    assert client.get(BASE, headers=headers).json()["current_step"] == 3


def test_step3_requires_title(client, supabase, artist):
    _, headers = artist
    submit_basic(client, headers)
    submit_details(client, headers)
    res = client.post(f"{BASE}/services", headers=headers, json={"category": "Live", "title": ""})
    assert res.status_code == 422
    assert res.json()["detail"] == "Title is required"
    assert supabase.tables["artist_services"] == []
