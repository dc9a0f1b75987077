"""Tests for success and capacity-error keyword detection."""

from __future__ import annotations

import pytest
from fakes import FakeElement, FakeFrame

from create_retry.core.detect import (
    REDIRECT_MESSAGE,
    check_for_errors,
    check_instance_created,
    contains_keyword,
    is_instances_url,
)

CREATE_URL = "https://cloud.oracle.com/compute/instances/create"


class TestCheckInstanceCreated:
    def test_status_region_with_keyword(self):
        frame = FakeFrame(
            {'[role="status"]': [FakeElement("Instance provisioning started")]}, url=CREATE_URL
        )

        assert check_instance_created(frame) == "Instance provisioning started"

    @pytest.mark.parametrize("word", ["created", "SUCCESS", "Launched", "starting"])
    def test_keywords_case_insensitive(self, word):
        frame = FakeFrame({".alert-success": [FakeElement(f"Instance {word}")]}, url=CREATE_URL)

        assert check_instance_created(frame) is not None

    def test_status_region_without_keyword(self):
        frame = FakeFrame({'[role="status"]': [FakeElement("Saving draft")]}, url=CREATE_URL)

        assert check_instance_created(frame) is None

    def test_redirect_to_instance_list(self):
        frame = FakeFrame(url="https://cloud.oracle.com/compute/instances/ocid1.instance")

        assert check_instance_created(frame) == REDIRECT_MESSAGE

    def test_still_on_create_form(self):
        assert check_instance_created(FakeFrame(url=CREATE_URL)) is None

    def test_inaccessible_frame(self):
        assert check_instance_created(FakeFrame(broken=True, url=CREATE_URL)) is None


class TestCheckForErrors:
    def test_capacity_error(self):
        frame = FakeFrame(
            {'[role="alert"]': [FakeElement("Out of host capacity.")]}, url=CREATE_URL
        )

        assert check_for_errors(frame) == "Out of host capacity."

    def test_quota_warning(self):
        frame = FakeFrame({".oui-alert-warning": [FakeElement("Service limit exceeded")]})

        assert check_for_errors(frame) == "Service limit exceeded"

    def test_unrelated_alert(self):
        frame = FakeFrame({'[role="alert"]': [FakeElement("Name is required")]})

        assert check_for_errors(frame) is None

    def test_no_alerts(self):
        assert check_for_errors(FakeFrame()) is None


class TestHelpers:
    def test_contains_keyword(self):
        assert contains_keyword("Out of CAPACITY", ("capacity",))
        assert not contains_keyword(None, ("capacity",))

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://cloud.oracle.com/compute/instances", True),
            (CREATE_URL, False),
            ("https://cloud.oracle.com/", False),
            ("", False),
        ],
    )
    def test_is_instances_url(self, url, expected):
        assert is_instances_url(url) is expected
