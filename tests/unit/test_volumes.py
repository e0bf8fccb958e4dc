"""Tests for requests against the block storage service."""

import json
from datetime import datetime, timezone

import pytest
import responses
from stackresults import volumes
from stackresults.errors import MalformedPayload, TransportError

VOLUMES_URL = "https://volume.example.com/v2/5ef70662f8b34079a6eddb8da9d75fe8/volumes"
VOLUME_ID = "d32019d3-bc6e-4319-9c1d-6722fc136a22"


class TestListVolumes:
    """Test listing volumes across ``volumes_links`` pages."""

    @responses.activate
    def test_lists_detail_by_default(self, volume_client, volume_payload) -> None:
        """Test that listing requests volumes/detail by default."""
        responses.add(
            responses.GET, VOLUMES_URL + "/detail", json={"volumes": [volume_payload]}
        )

        found = volumes.list(volume_client).all_entities()

        assert [volume.name for volume in found] == ["vol-001"]
        assert found[0].attachments[0].server_id == "83ec2e3b-4321-422b-8706-a84185f52a0a"
        assert responses.calls[0].request.url == VOLUMES_URL + "/detail"

    @responses.activate
    def test_summary_listing(self, volume_client) -> None:
        """Test listing volumes without details."""
        responses.add(
            responses.GET, VOLUMES_URL, json={"volumes": [{"id": "v1", "name": "a"}]}
        )

        found = volumes.list(volume_client, detail=False).all_entities()

        assert found[0].id == "v1"
        assert found[0].size == 0

    @responses.activate
    def test_follows_next_links(self, volume_client) -> None:
        """Test following volumes_links across pages."""
        second = VOLUMES_URL + "/detail?limit=2&marker=v2"
        responses.add(
            responses.GET,
            VOLUMES_URL + "/detail?limit=2",
            json={
                "volumes": [{"id": "v1"}, {"id": "v2"}],
                "volumes_links": [{"rel": "next", "href": second}],
            },
        )
        responses.add(responses.GET, second, json={"volumes": [{"id": "v3"}]})

        pager = volumes.list(volume_client, limit=2)

        assert [volume.id for volume in pager.entities()] == ["v1", "v2", "v3"]
        assert len(responses.calls) == 2

    @responses.activate
    def test_stops_on_empty_page(self, volume_client) -> None:
        """Test that an empty first page ends the listing."""
        responses.add(
            responses.GET,
            VOLUMES_URL + "/detail",
            json={
                "volumes": [],
                "volumes_links": [{"rel": "next", "href": VOLUMES_URL + "/detail?marker=z"}],
            },
        )

        assert volumes.list(volume_client).all_pages() == []
        assert len(responses.calls) == 1


class TestVolumeRequests:
    """Test single-volume requests and their results."""

    @responses.activate
    def test_get(self, volume_client, volume_payload) -> None:
        """Test getting one volume wrapped under its label."""
        responses.add(
            responses.GET, f"{VOLUMES_URL}/{VOLUME_ID}", json={"volume": volume_payload}
        )

        volume = volumes.get(volume_client, VOLUME_ID).extract()

        assert volume.id == VOLUME_ID
        assert volume.created_at == datetime(2015, 9, 17, 3, 32, 29, tzinfo=timezone.utc)
        assert volume.metadata == {"foo": "bar"}
        assert volume.volume_image_metadata["image_name"] == "centos"
        assert volume.snapshot_id == ""

    @responses.activate
    def test_get_without_wrapper_is_malformed(self, volume_client, volume_payload) -> None:
        """Test that an unwrapped volume body raises MalformedPayload."""
        responses.add(responses.GET, f"{VOLUMES_URL}/{VOLUME_ID}", json=volume_payload)

        with pytest.raises(MalformedPayload):
            volumes.get(volume_client, VOLUME_ID).extract()

    @responses.activate
    def test_create_wraps_body(self, volume_client) -> None:
        """Test that create wraps the request body under volume."""
        responses.add(
            responses.POST,
            VOLUMES_URL,
            json={"volume": {"id": "new", "size": 10, "status": "creating"}},
            status=202,
        )

        volume = volumes.create(volume_client, {"size": 10, "name": "data"}).extract()

        sent = json.loads(responses.calls[0].request.body)
        assert sent == {"volume": {"size": 10, "name": "data"}}
        assert volume.status == "creating"
        assert volume.size == 10

    @responses.activate
    def test_update(self, volume_client, volume_payload) -> None:
        """Test updating a volume."""
        volume_payload["name"] = "renamed"
        responses.add(
            responses.PUT, f"{VOLUMES_URL}/{VOLUME_ID}", json={"volume": volume_payload}
        )

        volume = volumes.update(volume_client, VOLUME_ID, {"name": "renamed"}).extract()

        assert json.loads(responses.calls[0].request.body) == {"volume": {"name": "renamed"}}
        assert volume.name == "renamed"

    @pytest.mark.parametrize("status", [202, 204])
    @responses.activate
    def test_delete(self, volume_client, status) -> None:
        """Test deleting a volume with either accepted status."""
        responses.add(responses.DELETE, f"{VOLUMES_URL}/{VOLUME_ID}", status=status)

        assert volumes.delete(volume_client, VOLUME_ID).extract_err() is None

    @responses.activate
    def test_delete_missing(self, volume_client) -> None:
        """Test that deleting a missing volume raises on extract_err."""
        responses.add(responses.DELETE, f"{VOLUMES_URL}/{VOLUME_ID}", status=404)

        with pytest.raises(TransportError) as excinfo:
            volumes.delete(volume_client, VOLUME_ID).extract_err()

        assert excinfo.value.status_code == 404
