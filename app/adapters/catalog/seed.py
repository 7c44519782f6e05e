"""Demo catalog and service requests used for local development (APP_SEED_DEMO_DATA=true)."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from app.schemas.catalog import Account, Cookie, Game
from app.schemas.requests import ServiceRequest


def demo_accounts(now: datetime | None = None) -> list[Account]:
    now = now or datetime.now(timezone.utc)
    day = timedelta(days=1)
    return [
        Account(
            id="1", service="netflix", email="premium1@example.com", password="securepass123",
            status="active", last_used=None, added_on=now - 15 * day,
            expires_on=now + 45 * day, usage_count=0,
        ),
        Account(
            id="2", service="netflix", email="premium2@example.com", password="netflixpass456",
            status="active", last_used=now - 2 * day, added_on=now - 20 * day,
            expires_on=now + 10 * day, usage_count=3,
        ),
        Account(
            id="3", service="crunchyroll", email="anime1@example.com", password="animepass123",
            status="active", last_used=None, added_on=now - 5 * day,
            expires_on=now + 25 * day, usage_count=0,
        ),
        Account(
            id="4", service="steam", email="gamer1@example.com", password="steampass123",
            status="expiring", last_used=now - day, added_on=now - 25 * day,
            expires_on=now + 5 * day, usage_count=2,
            games=[
                Game(id="g1", account_id="4", name="Cyberpunk 2077",
                     description="Open-world RPG set in a dystopian future"),
                Game(id="g2", account_id="4", name="Elden Ring"),
            ],
        ),
        Account(
            id="5", service="amazon", email="prime1@example.com", password="primepass123",
            status="active", last_used=None, added_on=now - 10 * day,
            expires_on=now + 50 * day, usage_count=0,
        ),
        Account(
            id="6", service="amazon", email="prime2@example.com", password="amazonpass456",
            status="expired", last_used=now - 7 * day, added_on=now - 60 * day,
            expires_on=now - day, usage_count=5,
        ),
    ]


def demo_cookies(now: datetime | None = None) -> list[Cookie]:
    now = now or datetime.now(timezone.utc)
    day = timedelta(days=1)
    return [
        Cookie(
            id="1", name="NetflixId", value="cl2x42fs9mze04k3ntexmpl", domain=".netflix.com",
            added_on=now - 2 * day, expires_on=now + 28 * day, status="active",
        ),
        Cookie(
            id="2", name="NetflixSecure", value="v2x94jfgt745jk86ntexmpl", domain=".netflix.com",
            added_on=now - 5 * day, expires_on=now + 25 * day, status="active",
        ),
        Cookie(
            id="3", name="NetflixSession", value="b4m67pts30vz28k9ntexmpl", domain=".netflix.com",
            added_on=now - day, expires_on=now + 6 * day, status="expiring",
        ),
    ]


def demo_requests(now: datetime | None = None) -> list[ServiceRequest]:
    now = now or datetime.now(timezone.utc)
    day = timedelta(days=1)
    return [
        ServiceRequest(
            id="req-1", email="user@example.com", service="netflix", plan="premium",
            reason="Family movie nights on weekends", requested_on=now - 3 * day,
            status="pending",
        ),
        ServiceRequest(
            id="req-2", email="another@example.com", service="disney", plan="standard",
            reason="Want to watch the new animated series", requested_on=now - day,
            status="approved",
        ),
        ServiceRequest(
            id="req-3", email="test@example.com", service="hbo max", plan="standard",
            reason="Catching up on a drama before the finale", requested_on=now - 5 * day,
            status="denied",
        ),
    ]
