"""
Tests for the service layer: batch policy, validation glue, telemetry calls.
"""
import pytest

from shortlink_app.exceptions import ValidationErrorKind
from shortlink_app.schemas.link import LinkCreate
from shortlink_app.services.link_service import LinkService
from shortlink_app.services.registry import LinkRegistry
from shortlink_app.telemetry.models import Origin, Severity


class TestCreateLinks:
    """Test batch creation"""

    def test_two_generated_codes_in_one_batch_are_distinct(self, link_service):
        result = link_service.create_links([
            LinkCreate(url="https://example.com"),
            LinkCreate(url="https://example.com"),
        ])

        assert result.created == 2
        codes = {outcome.link.short_code for outcome in result.results}
        assert len(codes) == 2

    def test_best_effort_batch(self, link_service, registry):
        result = link_service.create_links([
            LinkCreate(url="https://example.com/ok", custom_code="okay1"),
            LinkCreate(url="not-a-valid-url"),
            LinkCreate(url="https://example.com/x", custom_code="ab"),
            LinkCreate(url="https://example.com/y", validity_minutes=0),
            LinkCreate(url="https://example.com/ok", custom_code="okay1"),
        ])

        kinds = [outcome.error.kind if outcome.error else None for outcome in result.results]
        assert kinds == [
            None,
            ValidationErrorKind.INVALID_URL,
            ValidationErrorKind.INVALID_CUSTOM_CODE,
            ValidationErrorKind.INVALID_VALIDITY_WINDOW,
            ValidationErrorKind.CODE_COLLISION,
        ]
        assert [outcome.index for outcome in result.results] == [0, 1, 2, 3, 4]
        assert result.created == 1
        assert result.failed == 4
        # Earlier success is kept
        assert "okay1" in registry
        assert len(registry) == 1

    def test_outcome_carries_derived_fields(self, link_service):
        result = link_service.create_links([
            LinkCreate(url="https://example.com", validity_minutes=90)
        ])
        link = result.results[0].link

        assert result.results[0].success is True
        assert link.is_expired is False
        assert link.time_remaining == "1h 30m remaining"
        assert link.short_url.endswith(f"/{link.short_code}")

    def test_integral_float_window_accepted(self, link_service):
        result = link_service.create_links([
            LinkCreate(url="https://example.com", validity_minutes=15.0),
            LinkCreate(url="https://example.com", validity_minutes=1.5),
        ])

        assert result.results[0].success is True
        assert result.results[1].error.kind == ValidationErrorKind.INVALID_VALIDITY_WINDOW

    def test_huge_window_reported_per_request(self, link_service, registry):
        result = link_service.create_links([
            LinkCreate(url="https://a.example.com"),
            LinkCreate(url="https://b.example.com", validity_minutes=10 ** 10),
        ])

        assert result.created == 1
        assert result.failed == 1
        assert result.results[0].success is True
        assert result.results[1].error.kind == ValidationErrorKind.INVALID_VALIDITY_WINDOW
        assert len(registry) == 1

    def test_unbounded_registry_still_reports_overflow(self, clock, telemetry):
        registry = LinkRegistry(clock=clock, max_validity_minutes=None)
        service = LinkService(registry=registry, telemetry=telemetry)

        result = service.create_links([
            LinkCreate(url="https://a.example.com"),
            LinkCreate(url="https://b.example.com", validity_minutes=10 ** 10),
        ])

        assert [outcome.success for outcome in result.results] == [True, False]
        assert result.results[1].error.kind == ValidationErrorKind.INVALID_VALIDITY_WINDOW

    @pytest.mark.parametrize("minutes", [True, "10", [5]])
    def test_non_numeric_window_rejected(self, link_service, minutes):
        result = link_service.create_links([LinkCreate(url="https://example.com", validity_minutes=minutes)])

        assert result.results[0].error.kind == ValidationErrorKind.INVALID_VALIDITY_WINDOW

    def test_empty_custom_code_means_generated(self, link_service):
        result = link_service.create_links([LinkCreate(url="https://example.com", custom_code="")])

        link = result.results[0].link
        assert len(link.short_code) == 6
        assert link.is_custom is False

    def test_empty_batch_rejected(self, link_service):
        result = link_service.create_links([])

        assert result.error.kind == ValidationErrorKind.INVALID_BATCH
        assert result.results == []

    def test_oversize_batch_rejected_whole(self, link_service, registry):
        result = link_service.create_links(
            [LinkCreate(url=f"https://example.com/{i}") for i in range(6)]
        )

        assert result.error.kind == ValidationErrorKind.INVALID_BATCH
        assert len(registry) == 0

    def test_emits_service_telemetry(self, link_service, telemetry):
        link_service.create_links([
            LinkCreate(url="https://example.com"),
            LinkCreate(url="bad url"),
        ])

        assert "Processing 2 URL shortening requests" in telemetry.messages()
        assert "Successfully created 1 shortened URLs" in telemetry.messages()
        assert "Invalid URL format: bad url" in telemetry.messages(Severity.ERROR)
        assert all(event.origin == Origin.BACKEND for event in telemetry.events)
        assert all(event.category == "service" for event in telemetry.events)


class TestClicksAndReads:
    """Test click recording and read operations"""

    def test_record_click(self, link_service):
        link_service.create_links([LinkCreate(url="https://example.com", custom_code="click1")])

        click = link_service.record_click("click1", "https://ref.test", "TestAgent/1.0")
        link = link_service.get_link("click1")

        assert click is not None
        assert link.click_count == 1
        assert link.clicks[0].location == "TestAgent/1.0"

    def test_record_click_unknown_code_is_non_fatal(self, link_service, registry, telemetry):
        link_service.create_links([LinkCreate(url="https://example.com", custom_code="known")])
        before = registry.list_all()

        assert link_service.record_click("unknown", "src", "ua") is None
        assert registry.list_all() == before
        assert "Click for unknown short code unknown" in telemetry.messages(Severity.WARN)

    def test_get_link_unknown(self, link_service):
        assert link_service.get_link("missing") is None

    def test_list_links_newest_first(self, link_service, clock):
        link_service.create_links([LinkCreate(url="https://example.com/1", custom_code="older")])
        clock.advance(seconds=30)
        link_service.create_links([LinkCreate(url="https://example.com/2", custom_code="newer")])

        codes = [link.short_code for link in link_service.list_links()]
        assert codes == ["newer", "older"]

    def test_recent_clicks(self, link_service):
        link_service.create_links([LinkCreate(url="https://example.com", custom_code="recent")])
        for i in range(3):
            link_service.record_click("recent", f"src{i}", "ua")

        clicks = link_service.recent_clicks("recent", limit=2)

        assert [click.source for click in clicks] == ["src2", "src1"]
        assert link_service.recent_clicks("missing") is None

    def test_stats_follow_the_clock(self, link_service, clock):
        link_service.create_links([
            LinkCreate(url="https://example.com/a", custom_code="brief", validity_minutes=1),
            LinkCreate(url="https://example.com/b", custom_code="lasting", validity_minutes=60),
        ])
        link_service.record_click("brief", "src", "ua")

        stats = link_service.get_stats()
        assert (stats.total_links, stats.active_links, stats.expired_links, stats.total_clicks) == (2, 2, 0, 1)

        clock.advance(seconds=61)

        stats = link_service.get_stats()
        assert (stats.active_links, stats.expired_links) == (1, 1)
