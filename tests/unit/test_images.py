"""Tests for requests against the image service."""

import json

import pytest
import responses
from stackresults import images
from stackresults.errors import TransportError
from stackresults.images import Image, ImageStatus, ImageVisibility

IMAGES_URL = "https://image.example.com/v2/images"
IMAGE_ID = "1bea47ed-f6a9-463b-b423-14b9cca9ad27"


class TestListImages:
    """Test listing images across linked pages."""

    @responses.activate
    def test_nothing_is_sent_until_iterated(self, image_client) -> None:
        """Test that listing sends no request until the pager is iterated."""
        images.list(image_client)

        assert len(responses.calls) == 0

    @responses.activate
    def test_two_page_listing(self, image_client) -> None:
        """Test listing images across two pages."""
        responses.add(
            responses.GET,
            IMAGES_URL + "?limit=1",
            json={"images": [{"id": "a"}], "next": "/v2/images?limit=1&marker=a"},
        )
        responses.add(
            responses.GET,
            IMAGES_URL + "?limit=1&marker=a",
            json={"images": [{"id": "b"}], "first": "/v2/images?limit=1"},
        )

        found = images.list(image_client, limit=1).all_entities()

        assert [image.id for image in found] == ["a", "b"]
        assert all(isinstance(image, Image) for image in found)
        assert [call.request.url for call in responses.calls] == [
            IMAGES_URL + "?limit=1",
            IMAGES_URL + "?limit=1&marker=a",
        ]

    @responses.activate
    def test_query_drops_none_values(self, image_client) -> None:
        """Test that None query values are left out of the URL."""
        responses.add(responses.GET, IMAGES_URL + "?status=active", json={"images": []})

        images.list(image_client, status="active", marker=None).all_pages()

        assert responses.calls[0].request.url == IMAGES_URL + "?status=active"

    @responses.activate
    def test_failing_page_raises(self, image_client) -> None:
        """Test that a failed list request raises while iterating."""
        responses.add(responses.GET, IMAGES_URL, status=401)

        with pytest.raises(TransportError) as excinfo:
            images.list(image_client).all_entities()

        assert excinfo.value.status_code == 401


class TestImageRequests:
    """Test single-image requests and their results."""

    @responses.activate
    def test_get(self, image_client, image_payload) -> None:
        """Test getting one image."""
        responses.add(responses.GET, f"{IMAGES_URL}/{IMAGE_ID}", json=image_payload)

        image = images.get(image_client, IMAGE_ID).extract()

        assert image.id == IMAGE_ID
        assert image.status == ImageStatus.ACTIVE
        assert image.visibility == ImageVisibility.PUBLIC
        assert image.properties["hw_disk_bus"] == "scsi"
        assert responses.calls[0].request.headers["X-Auth-Token"] == "secret-token"

    @responses.activate
    def test_get_not_found(self, image_client) -> None:
        """Test that a missing image raises on extract."""
        responses.add(responses.GET, f"{IMAGES_URL}/{IMAGE_ID}", status=404)

        result = images.get(image_client, IMAGE_ID)

        with pytest.raises(TransportError) as excinfo:
            result.extract()
        assert excinfo.value.status_code == 404

    @responses.activate
    def test_create(self, image_client) -> None:
        """Test creating an image with a custom property."""
        responses.add(
            responses.POST,
            IMAGES_URL,
            json={"id": "new", "name": "ubuntu", "status": "queued", "os_distro": "ubuntu"},
            status=201,
        )

        image = images.create(
            image_client, {"name": "ubuntu", "os_distro": "ubuntu"}
        ).extract()

        sent = json.loads(responses.calls[0].request.body)
        assert sent == {"name": "ubuntu", "os_distro": "ubuntu"}
        assert image.status == ImageStatus.QUEUED
        assert image.properties == {"os_distro": "ubuntu"}

    @responses.activate
    def test_create_expects_201(self, image_client) -> None:
        """Test that create only accepts a 201 response."""
        responses.add(responses.POST, IMAGES_URL, json={"id": "new"}, status=200)

        assert not images.create(image_client, {"name": "x"}).ok

    @responses.activate
    def test_update_sends_json_patch(self, image_client, image_payload) -> None:
        """Test that update sends a JSON-patch body and content type."""
        image_payload["name"] = "renamed"
        responses.add(responses.PATCH, f"{IMAGES_URL}/{IMAGE_ID}", json=image_payload)
        patch = [{"op": "replace", "path": "/name", "value": "renamed"}]

        image = images.update(image_client, IMAGE_ID, patch).extract()

        request = responses.calls[0].request
        assert request.headers["Content-Type"] == images.api.JSON_PATCH_CONTENT_TYPE
        assert json.loads(request.body) == patch
        assert image.name == "renamed"

    @responses.activate
    def test_delete(self, image_client) -> None:
        """Test deleting an image."""
        responses.add(responses.DELETE, f"{IMAGES_URL}/{IMAGE_ID}", status=204)

        assert images.delete(image_client, IMAGE_ID).extract_err() is None

    @responses.activate
    def test_delete_conflict(self, image_client) -> None:
        """Test that a refused delete raises on extract_err."""
        responses.add(responses.DELETE, f"{IMAGES_URL}/{IMAGE_ID}", status=409)

        with pytest.raises(TransportError):
            images.delete(image_client, IMAGE_ID).extract_err()
