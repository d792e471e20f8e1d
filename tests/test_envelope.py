import pytest

from jobfeed.envelope import find_job_array


@pytest.mark.parametrize("doc, expected", [
    ({"results": [1], "data": [2]}, [1]),
    ([3, 4], [3, 4]),
    ({"data": [5], "jobs": [6]}, [5]),
    ({"jobs": [6], "items": [7]}, [6]),
    ({"items": [7]}, [7]),
    ({"results": "nope", "items": [8]}, [8]),
    ({"data": []}, []),
])
def test_envelope_priority(doc, expected):
    assert find_job_array(doc) == expected


@pytest.mark.parametrize("doc", [{}, {"count": 3}, None, "text", 12])
def test_unrecognized_envelope(doc):
    assert find_job_array(doc) is None
