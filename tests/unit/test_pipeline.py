"""Unit tests for the status pipeline."""

from unittest.mock import MagicMock

from conftest import PROJECT_ID, envelope, make_deployment, make_instance
import pytest

from forge_status.client import EndpointKind
from forge_status.exceptions import ConsistencyError, ShapeError, TransportError
from forge_status.pipeline import collect_status, run_status
from forge_status.report import NO_INSTANCES, NOT_DEPLOYED

EXPECTED_INSTANCE_COUNT = 2


def make_fetch(deployment: bytes, health: bytes | None = None) -> MagicMock:
    documents = {EndpointKind.DEPLOYMENT: deployment, EndpointKind.HEALTH: health}
    return MagicMock(side_effect=lambda kind, project_id: documents[kind])


class TestCollectStatus:
    """Tests for collect_status."""

    def test_not_deployed_skips_health(self):
        """A never-deployed project does not fetch health."""
        fetch = make_fetch(envelope(None))

        snapshot = collect_status(fetch, PROJECT_ID)

        assert snapshot.deployment is None
        assert snapshot.instances is None
        fetch.assert_called_once_with(EndpointKind.DEPLOYMENT, PROJECT_ID)

    @pytest.mark.parametrize("state", ["building", "queued", "failed"])
    def test_unfinished_build_skips_health(self, state):
        """Health is only fetched for finished builds."""
        fetch = make_fetch(envelope(make_deployment(build_state=state)), envelope([]))

        snapshot = collect_status(fetch, PROJECT_ID)

        assert snapshot.deployment.build_state == state
        assert snapshot.instances is None
        fetch.assert_called_once_with(EndpointKind.DEPLOYMENT, PROJECT_ID)

    def test_finished_build_fetches_health(self):
        """Finished builds fetch and decode health."""
        fetch = make_fetch(
            envelope(make_deployment()),
            envelope([make_instance("us-east", 1), make_instance("eu-west", 1)]),
        )

        snapshot = collect_status(fetch, PROJECT_ID)

        assert len(snapshot.instances) == EXPECTED_INSTANCE_COUNT
        assert [call.args for call in fetch.call_args_list] == [
            (EndpointKind.DEPLOYMENT, PROJECT_ID),
            (EndpointKind.HEALTH, PROJECT_ID),
        ]

    def test_decode_error_stops_before_health(self):
        """A bad status document aborts before the health fetch."""
        fetch = make_fetch(envelope(make_deployment(project_id="prj-other")), envelope([]))

        with pytest.raises(ConsistencyError):
            collect_status(fetch, PROJECT_ID)
        fetch.assert_called_once()

    def test_transport_error_propagates(self):
        """Fetch errors propagate unchanged."""
        error = TransportError("GET /api/health/prj-0001 failed with status 502")
        documents = {EndpointKind.DEPLOYMENT: envelope(make_deployment())}

        def fetch(kind, project_id):
            if kind is EndpointKind.HEALTH:
                raise error
            return documents[kind]

        with pytest.raises(TransportError) as exc_info:
            collect_status(fetch, PROJECT_ID)
        assert exc_info.value is error

    def test_health_decode_error_propagates(self):
        """Malformed health aborts the run."""
        fetch = make_fetch(envelope(make_deployment()), envelope({"bad": True}))

        with pytest.raises(ShapeError):
            collect_status(fetch, PROJECT_ID)

    def test_to_dict(self):
        """Snapshots serialize with wire field names."""
        fetch = make_fetch(envelope(make_deployment()), envelope([make_instance()]))

        data = collect_status(fetch, PROJECT_ID).to_dict()

        assert data["project_id"] == PROJECT_ID
        assert data["deployment"]["type"] == "deploy"
        assert data["deployment"]["build_state"] == "finished"
        assert data["health"][0]["region"] == "us-east"
        assert data["health"][0]["cardinal"]["ok"] is True


class TestRunStatus:
    """Tests for run_status."""

    def test_not_deployed(self, project):
        """The not-deployed notice is rendered."""
        report = run_status(make_fetch(b'{"data": null}'), project)
        assert report.endswith(NOT_DEPLOYED + "\n")

    def test_no_instances(self, project):
        """An empty health list renders the no-instances line."""
        report = run_status(make_fetch(envelope(make_deployment()), envelope([])), project)
        assert report.endswith(f"Health:       {NO_INSTANCES}\n")

    def test_same_region_one_header(self, project):
        """Two instances in one region render a single header."""
        fetch = make_fetch(
            envelope(make_deployment()),
            envelope([make_instance("us-east", 1), make_instance("us-east", 2)]),
        )
        report = run_status(fetch, project)

        assert report.count("• ") == 1
        assert report.count("Cardinal:") == EXPECTED_INSTANCE_COUNT

    def test_two_regions_two_headers(self, project):
        """Two regions render two headers."""
        fetch = make_fetch(
            envelope(make_deployment()),
            envelope([make_instance("us-east", 1), make_instance("eu-west", 1)]),
        )
        report = run_status(fetch, project)

        assert "• us-east" in report
        assert "• eu-west" in report
        assert report.count("• ") == EXPECTED_INSTANCE_COUNT
