"""
Pytest configuration: an in-memory stand-in for the Supabase client.

FakeSupabase implements the slice of the supabase-py surface the app uses:
table(...).select/insert/update/upsert + eq/order/limit + execute(), and
auth.sign_in_with_password/sign_up/get_user/admin.sign_out.
"""

import copy
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from artune.database.supabase_client import get_supabase
from artune.main import app
from artune.modules.auth import service as auth_service
from artune.modules.onboarding import registry

TABLE_DEFAULTS = {
    "profiles": {"full_name": None, "phone": None},
    "artist_profiles": {
        "bio": None,
        "profile_image_url": None,
        "portfolio_images": None,
        "location": None,
        "years_experience": None,
        "hourly_rate": None,
        "availability_status": "available",
        "verified": False,
        "last_active": None,
    },
    "artist_services": {
        "description": None,
        "price": None,
        "price_type": "fixed",
        "duration_minutes": None,
    },
}

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.columns = "*"
        self.payload = None
        self.on_conflict = None
        self.filters = []
        self.order_by = None
        self.limit_n = None

    def select(self, columns="*"):
        self.op = "select"
        self.columns = columns
        return self

    def insert(self, payload):
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload):
        self.op = "update"
        self.payload = payload
        return self

    def upsert(self, payload, on_conflict=None):
        self.op = "upsert"
        self.payload = payload
        self.on_conflict = on_conflict
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    def execute(self):
        self.db.calls.append((self.table, self.op))
        error = self.db.failures.get((self.table, self.op))
        if error is not None:
            raise error
        return SimpleNamespace(data=getattr(self, f"_{self.op}")())

    def _matches(self, row):
        return all(row.get(col) == val for col, val in self.filters)

    def _project(self, row):
        if self.columns.strip() == "*":
            return copy.deepcopy(row)
        cols = [c.strip() for c in self.columns.split(",")]
        return {c: row.get(c) for c in cols}

    def _select(self):
        rows = [r for r in self.db.rows(self.table) if self._matches(r)]
        if self.order_by:
            column, desc = self.order_by
            rows.sort(key=lambda r: r[column], reverse=desc)
        if self.limit_n is not None:
            rows = rows[:self.limit_n]
        return [self._project(r) for r in rows]

    def _insert(self):
        return [copy.deepcopy(self.db.add_row(self.table, self.payload))]

    def _update(self):
        updated = []
        for row in self.db.rows(self.table):
            if self._matches(row):
                row.update(self.payload)
                updated.append(copy.deepcopy(row))
        return updated

    def _upsert(self):
        key = self.on_conflict or "id"
        for row in self.db.rows(self.table):
            if key in self.payload and row.get(key) == self.payload[key]:
                row.update(self.payload)
                return [copy.deepcopy(row)]
        return self._insert()


class FakeAuthAdmin:
    def __init__(self, auth):
        self.auth = auth

    def sign_out(self, jwt, scope="global"):
        self.auth.signed_out.append(jwt)
        self.auth.sessions.pop(jwt, None)


class FakeAuth:
    def __init__(self, db):
        self.db = db
        self.users = {}
        self.passwords = {}
        self.sessions = {}
        self.signed_out = []
        self.admin = FakeAuthAdmin(self)

    def create_user(self, email, password="secret123", metadata=None):
        user = SimpleNamespace(
            id=str(uuid.uuid4()),
            email=email,
            user_metadata=metadata or {},
            created_at=BASE_TIME.isoformat(),
        )
        self.users[email] = user
        self.passwords[email] = password
        return user

    def issue_token(self, user):
        token = f"token-{uuid.uuid4()}"
        self.sessions[token] = user
        return token

    def sign_in_with_password(self, credentials):
        self.db.calls.append(("auth", "sign_in"))
        email = credentials["email"]
        if email not in self.users or self.passwords[email] != credentials["password"]:
            raise Exception("Invalid login credentials")
        user = self.users[email]
        session = SimpleNamespace(access_token=self.issue_token(user))
        return SimpleNamespace(user=user, session=session)

    def sign_up(self, credentials):
        self.db.calls.append(("auth", "sign_up"))
        email = credentials["email"]
        if email in self.users:
            raise Exception("User already registered")
        metadata = credentials.get("options", {}).get("data", {})
        user = self.create_user(email, credentials["password"], metadata)
        session = SimpleNamespace(access_token=self.issue_token(user))
        return SimpleNamespace(user=user, session=session)

    def get_user(self, jwt=None):
        user = self.sessions.get(jwt)
        if user is None:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=user)


class FakeSupabase:
    def __init__(self):
        self.tables = {name: [] for name in TABLE_DEFAULTS}
        self.calls = []
        self.failures = {}
        self._clock = 0
        self.auth = FakeAuth(self)

    def table(self, name):
        return FakeQuery(self, name)

    def rows(self, table):
        return self.tables.setdefault(table, [])

    def add_row(self, table, payload):
        self._clock += 1
        stamp = (BASE_TIME + timedelta(minutes=self._clock)).isoformat()
        row = {"id": str(uuid.uuid4()), "created_at": stamp, "updated_at": stamp}
        row.update(TABLE_DEFAULTS.get(table, {}))
        row.update(payload)
        self.rows(table).append(row)
        return row

    def fail(self, table, op, message="database unavailable"):
        self.failures[(table, op)] = Exception(message)

    def remote_calls(self):
        return list(self.calls)


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def client(supabase):
    app.dependency_overrides[get_supabase] = lambda: supabase
    yield TestClient(app)
    app.dependency_overrides.pop(get_supabase, None)


@pytest.fixture(autouse=True)
def reset_state():
    registry.clear()
    auth_service._AUTH_USER_CACHE.clear()
    yield
    registry.clear()
    auth_service._AUTH_USER_CACHE.clear()


def make_user(supabase, email, role, full_name=None, with_profile=True):
    """Create an auth identity (and profiles row) and return (user, bearer headers)."""
    user = supabase.auth.create_user(email, metadata={"role": role})
    if with_profile:
        supabase.add_row("profiles", {
            "id": user.id, "email": email, "role": role, "full_name": full_name
        })
    token = supabase.auth.issue_token(user)
    return user, {"Authorization": f"Bearer {token}"}


@pytest.fixture
def artist(supabase):
    return make_user(supabase, "artist@test.com", "artist", full_name="Jane Doe")


@pytest.fixture
def client_user(supabase):
    return make_user(supabase, "client@test.com", "client")
