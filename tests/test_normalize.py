from __future__ import annotations

import pytest

from jobfeed.normalize import dial_uri, make_job_id, normalize_batch, normalize_job


def test_results_scenario_fills_placeholders():
    job = normalize_job({"id": "7", "title": "Cook", "primary_details": {"Place": "Pune"}}, 0)

    assert job.id == "7"
    assert job.title == "Cook"
    assert job.location == "Pune"
    assert job.salary == "Salary not specified"
    assert job.phone == "Phone not available"
    assert job.company == ""
    assert job.bookmarked is False


def test_numeric_id_is_stringified_and_trimmed():
    assert normalize_job({"id": 42, "title": "x"}, 0).id == "42"
    assert normalize_job({"id": "  abc ", "title": "x"}, 0).id == "abc"


def test_id_from_title_and_position():
    job = normalize_job({"title": "Delivery  Boy Needed"}, 5)
    assert job.id == "job-delivery-boy-needed-5"


def test_id_from_position_and_timestamp(monkeypatch):
    monkeypatch.setattr("jobfeed.normalize._millis", lambda: 1700000000000)
    job = normalize_job({"title": "  "}, 3)
    assert job.id == "job-3-1700000000000"
    assert job.title == "Untitled Job"


def test_location_falls_back_to_slug():
    job = normalize_job({"id": "1", "job_location_slug": "hyderabad"}, 0)
    assert job.location == "hyderabad"


def test_salary_from_primary_details():
    job = normalize_job({"id": "1", "primary_details": {"Salary": "₹15000 - ₹20000"}}, 0)
    assert job.salary == "₹15000 - ₹20000"


@pytest.mark.parametrize("raw, expected", [
    ({"whatsapp_no": "9876543210"}, "9876543210"),
    ({"contact_preference": {"whatsapp_link": "https://wa.me/?tel:+919876543210"}}, "+919876543210"),
    ({"button_text": "Call HR", "custom_link": "tel:9123456780"}, "9123456780"),
    ({"button_text": "Apply", "custom_link": "tel:9123456780"}, "Phone not available"),
    ({"contact_preference": {"whatsapp_link": "https://wa.me/919876543210"}}, "Phone not available"),
])
def test_phone_chain(raw, expected):
    assert normalize_job({"id": "1", **raw}, 0).phone == expected


def test_description_from_translated_content_tag():
    raw = {
        "id": "1",
        "contentV3": {"V3": [
            {"field_key": "Gender", "field_value": "Any"},
            {"field_name": " ఇతర వివరాలు", "field_value": "Night shift"},
        ]},
        "content": "fallback",
    }
    assert normalize_job(raw, 0).description == "Night shift"


def test_description_prefers_flat_field_then_content_string():
    assert normalize_job({"id": "1", "other_details": "Flat"}, 0).description == "Flat"
    assert normalize_job({"id": "1", "content": "From content"}, 0).description == "From content"
    assert normalize_job({"id": "1", "content": {"nested": True}}, 0).description == ""


def test_job_type_and_category_chains():
    raw = {
        "id": "1",
        "job_hours": "Full time",
        "contentV3": {"V3": [{"field_key": "Job Category", "field_value": "Hotel"}]},
    }
    job = normalize_job(raw, 0)
    assert job.job_type == "Full time"
    assert job.category == "Hotel"

    job = normalize_job({"id": "2", "primary_details": {"Job_Type": "Part time"}, "job_category": "Retail"}, 0)
    assert job.job_type == "Part time"
    assert job.category == "Retail"

    raw = {"id": "3", "contentV3": {"V3": [{"field_name": "జాబ్ కేటగిరి", "field_value": "Driver"}]}}
    job = normalize_job(raw, 0)
    assert job.job_type == "Driver"
    assert job.category == "Driver"


def test_malformed_nested_field_only_blanks_that_field():
    raw = {
        "id": "9",
        "title": "Cook",
        "primary_details": ["not", "a", "mapping"],
        "contentV3": "broken",
        "company_name": "Hotel Taj",
    }
    job = normalize_job(raw, 0)
    assert job.id == "9"
    assert job.company == "Hotel Taj"
    assert job.location == "Location not specified"
    assert job.category == ""


@pytest.mark.parametrize("raw", [None, 17, "text", ["a"], object()])
def test_non_mapping_record_degrades(raw):
    job = normalize_job(raw, 4)
    assert job.title == "Untitled Job"
    assert job.location == "Error parsing location"
    assert job.description == "Error parsing job details"
    assert job.id.startswith("job-4-")


def test_batch_ids_unique_for_repeated_titles():
    records = [{"title": "Cook"}, {"title": "Cook"}, {}, {}]
    jobs = normalize_batch(records, 0)
    assert len({j.id for j in jobs}) == len(jobs)


def test_batch_avoids_ids_already_taken():
    taken = {"job-cook-2"}
    jobs = normalize_batch([{"title": "Cook"}], 2, taken)
    assert jobs[0].id == "job-cook-2-2"
    assert "job-cook-2-2" in taken


def test_upstream_id_kept_even_when_repeated():
    assert make_job_id({"id": "5"}, 0, {"5"}) == "5"


@pytest.mark.parametrize("phone, expected", [
    ("+91 98765-43210", "tel:+919876543210"),
    ("Phone not available", None),
    ("", None),
])
def test_dial_uri(phone, expected):
    assert dial_uri(phone) == expected
