from lifeskill_admin.common.pagination import PageOptions, QueryResult, order_by_clause
from lifeskill_admin.common.schemas import PageQuery
from lifeskill_admin.common.validators import validate_payload
from lifeskill_admin.core.exceptions import ValidationError

COLUMNS = {"visitDate": "v.visit_date", "time": "v.visit_time"}


def test_order_by_honours_known_fields_only():
    assert order_by_clause("visitDate:desc,time:asc", COLUMNS, "v.visit_id") == "v.visit_date DESC, v.visit_time ASC"
    assert order_by_clause("password:desc", COLUMNS, "v.visit_id") == "v.visit_id"
    assert order_by_clause(None, COLUMNS, "v.visit_id") == "v.visit_id"


def test_page_options_clamp_and_offset():
    options = PageOptions(limit=0, page=-3)
    assert (options.limit, options.page, options.offset) == (10, 1, 0)

    big = PageOptions(limit=10_000, page=3)
    assert big.limit == 500
    assert big.offset == 1000


def test_query_result_total_pages():
    result = QueryResult(results=[1, 2], page=1, limit=2, total_results=5)

    assert result.to_dict()["totalPages"] == 3
    assert result.map(lambda x: x * 10).results == [10, 20]


def test_page_query_rejects_unknown_args():
    try:
        validate_payload(PageQuery, {"limit": "5", "bogus": "1"})
    except ValidationError as e:
        assert "bogus" in str(e)
    else:
        raise AssertionError("expected ValidationError")

    assert validate_payload(PageQuery, {"limit": "5", "sortBy": "name:asc"}).page_options().limit == 5
