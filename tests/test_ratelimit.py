"""Tests for sliding-window rate limiting."""

import threading
from unittest.mock import AsyncMock, patch

import pytest
from django.test import Client, RequestFactory

from apps.core.ratelimit import SlidingWindowRateLimiter, api_limiter, contact_limiter, get_client_ip


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def limiter(clock: FakeClock) -> SlidingWindowRateLimiter:
    return SlidingWindowRateLimiter("test", max_requests=3, window=60, clock=clock)


class TestSlidingWindowRateLimiter:
    """Unit tests for the limiter itself."""

    def test_allows_up_to_max(self, limiter: SlidingWindowRateLimiter) -> None:
        """The first max_requests hits are allowed, with remaining counting down."""
        remaining = [limiter.hit("1.2.3.4").remaining for _ in range(3)]
        assert remaining == [2, 1, 0]

    def test_blocks_over_max(self, limiter: SlidingWindowRateLimiter) -> None:
        """The hit after the cap is refused."""
        for _ in range(3):
            limiter.hit("1.2.3.4")
        decision = limiter.hit("1.2.3.4")
        assert decision.allowed is False
        assert decision.remaining == 0

    def test_refused_hits_are_not_recorded(self, limiter: SlidingWindowRateLimiter, clock: FakeClock) -> None:
        """Refused requests do not extend the window."""
        for _ in range(3):
            limiter.hit("1.2.3.4")
        clock.advance(30)
        for _ in range(10):
            limiter.hit("1.2.3.4")
        clock.advance(31)
        assert limiter.hit("1.2.3.4").allowed is True

    def test_keys_are_independent(self, limiter: SlidingWindowRateLimiter) -> None:
        """One address hitting the cap does not affect another."""
        for _ in range(3):
            limiter.hit("1.2.3.4")
        assert limiter.hit("1.2.3.4").allowed is False
        assert limiter.hit("5.6.7.8").allowed is True

    def test_window_slides(self, limiter: SlidingWindowRateLimiter, clock: FakeClock) -> None:
        """Hits free up one at a time as they age out of the window."""
        limiter.hit("k")
        clock.advance(20)
        limiter.hit("k")
        limiter.hit("k")
        assert limiter.hit("k").allowed is False

        clock.advance(41)  # first hit is now 61s old
        assert limiter.hit("k").allowed is True
        assert limiter.hit("k").allowed is False

    def test_retry_after(self, limiter: SlidingWindowRateLimiter, clock: FakeClock) -> None:
        """Retry-After counts down to when the oldest hit expires."""
        for _ in range(3):
            limiter.hit("k")
        clock.advance(45)
        assert limiter.hit("k").retry_after == 15

    def test_cleanup_drops_stale_keys(self, limiter: SlidingWindowRateLimiter, clock: FakeClock) -> None:
        """Keys with only expired hits are removed."""
        limiter.hit("old")
        clock.advance(61)
        limiter.hit("new")
        limiter.cleanup()
        assert "old" not in limiter._hits
        assert "new" in limiter._hits

    def test_hits_prune_stale_keys_periodically(self, clock: FakeClock) -> None:
        """Every cleanup_interval hits, expired keys are dropped without an explicit cleanup call."""
        limiter = SlidingWindowRateLimiter("periodic", max_requests=3, window=60, clock=clock, cleanup_interval=10)
        for i in range(5):
            limiter.hit(f"old-{i}")
        clock.advance(61)

        for _ in range(4):
            limiter.hit("fresh")
        assert len(limiter._hits) == 6

        limiter.hit("fresh")
        assert set(limiter._hits) == {"fresh"}

    def test_map_stays_bounded_under_churn(self, clock: FakeClock) -> None:
        """One-off addresses never accumulate beyond a cleanup interval of stale keys."""
        limiter = SlidingWindowRateLimiter("churn", max_requests=3, window=60, clock=clock, cleanup_interval=20)
        for i in range(1000):
            limiter.hit(f"10.0.{i // 256}.{i % 256}")
            clock.advance(61)
        assert len(limiter._hits) <= 20

    def test_reset(self, limiter: SlidingWindowRateLimiter) -> None:
        """Reset clears every counter."""
        for _ in range(3):
            limiter.hit("k")
        limiter.reset()
        assert limiter.hit("k").allowed is True

    def test_concurrent_hits_never_exceed_cap(self) -> None:
        """Check-and-record is atomic across threads."""
        limiter = SlidingWindowRateLimiter("threads", max_requests=50, window=60)
        allowed = []
        barrier = threading.Barrier(8)

        def worker() -> None:
            barrier.wait()
            for _ in range(25):
                if limiter.hit("shared").allowed:
                    allowed.append(1)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(allowed) == 50

    def test_concurrent_hits_with_periodic_cleanup(self, clock: FakeClock) -> None:
        """The cleanup counter and key pruning are safe under concurrent hits."""
        limiter = SlidingWindowRateLimiter("threads", max_requests=5, window=60, clock=clock, cleanup_interval=7)
        errors = []
        barrier = threading.Barrier(8)

        def worker(n: int) -> None:
            barrier.wait()
            try:
                for i in range(200):
                    limiter.hit(f"{n}-{i}")
            except Exception as exc:  # noqa: BLE001
                errors.append(exc)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert limiter._hits_since_cleanup == (8 * 200) % 7

    def test_configured_limits(self) -> None:
        """The process-wide limiters use the documented caps."""
        assert (api_limiter.max_requests, api_limiter.window) == (100, 15 * 60)
        assert (contact_limiter.max_requests, contact_limiter.window) == (5, 60 * 60)


class TestClientIp:
    """Client address extraction."""

    def test_remote_addr(self) -> None:
        """REMOTE_ADDR is used by default."""
        request = RequestFactory().get("/", REMOTE_ADDR="10.1.1.1", HTTP_X_FORWARDED_FOR="9.9.9.9")
        assert get_client_ip(request) == "10.1.1.1"

    def test_forwarded_for_when_trusted(self, settings) -> None:
        """Behind a trusted proxy the first X-Forwarded-For entry wins."""
        settings.TRUST_X_FORWARDED_FOR = True
        request = RequestFactory().get("/", REMOTE_ADDR="10.1.1.1", HTTP_X_FORWARDED_FOR="9.9.9.9, 10.1.1.1")
        assert get_client_ip(request) == "9.9.9.9"


class TestApiRateLimits:
    """Limits applied over HTTP."""

    def test_global_limit_blocks_101st_request(self, client: Client) -> None:
        """The 101st API request in the window gets a 429."""
        for _ in range(100):
            assert client.get("/api/health").status_code == 200

        response = client.get("/api/health")
        assert response.status_code == 429
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "rate_limited"
        assert int(response["Retry-After"]) > 0

    def test_global_limit_is_per_address(self, client: Client) -> None:
        """Another address still gets through."""
        for _ in range(100):
            client.get("/api/health")
        assert client.get("/api/health").status_code == 429
        assert client.get("/api/health", REMOTE_ADDR="10.0.0.2").status_code == 200

    def test_rate_limit_headers(self, client: Client) -> None:
        """Allowed API responses advertise the remaining budget."""
        response = client.get("/api/health")
        assert response["X-RateLimit-Limit"] == "100"
        assert response["X-RateLimit-Remaining"] == "99"

    def test_contact_limit_blocks_sixth_submission(self, client: Client) -> None:
        """The 6th contact request in an hour gets a 429, before validation runs."""
        for _ in range(5):
            response = client.post("/api/contact", data={}, content_type="application/json")
            assert response.status_code == 400

        response = client.post("/api/contact", data={}, content_type="application/json")
        assert response.status_code == 429
        assert response.json()["code"] == "rate_limited"

    def test_contact_limit_does_not_touch_intake(self, client: Client) -> None:
        """A throttled submission never reaches the store or notifier."""
        for _ in range(5):
            contact_limiter.hit("127.0.0.1")

        with patch("apps.contact.views.submit_contact", new_callable=AsyncMock) as submit:
            response = client.post(
                "/api/contact",
                data={"name": "Ada", "email": "ada@example.com", "message": "hi"},
                content_type="application/json",
            )

        assert response.status_code == 429
        submit.assert_not_called()

    def test_contact_limit_leaves_other_endpoints_alone(self, client: Client) -> None:
        """Exhausting the contact limit does not block other API routes."""
        for _ in range(5):
            contact_limiter.hit("127.0.0.1")
        assert client.get("/api/health").status_code == 200

    def test_non_post_requests_leave_contact_budget_alone(self, client: Client) -> None:
        """GET/HEAD/OPTIONS on the contact route are 405s and cost no submissions."""
        for _ in range(5):
            assert client.get("/api/contact").status_code == 405
        assert client.head("/api/contact").status_code == 405
        assert client.options("/api/contact").status_code in (200, 405)

        for _ in range(5):
            response = client.post("/api/contact", data={}, content_type="application/json")
            assert response.status_code == 400
        assert client.post("/api/contact", data={}, content_type="application/json").status_code == 429

    def test_stale_contact_addresses_are_dropped(self, client: Client, monkeypatch) -> None:
        """Addresses whose contact hits have all expired are pruned as traffic continues."""
        clock = FakeClock()
        monkeypatch.setattr(contact_limiter, "_clock", clock)

        for i in range(50):
            client.post("/api/contact", data={}, content_type="application/json", REMOTE_ADDR=f"10.0.1.{i}")
        assert len(contact_limiter._hits) == 50

        clock.advance(2 * 60 * 60)
        for i in range(contact_limiter.cleanup_interval):
            client.post("/api/contact", data={}, content_type="application/json", REMOTE_ADDR=f"10.0.2.{i}")

        assert not any(key.startswith("10.0.1.") for key in contact_limiter._hits)
