import pytest

from acme_dashboard.utils.pagination import (
    ELLIPSIS,
    build_pagination_args,
    generate_pagination,
    get_page,
)


@pytest.mark.parametrize(
    "current, total, expected",
    [
        (1, 0, []),
        (1, 1, [1]),
        (4, 7, [1, 2, 3, 4, 5, 6, 7]),
        (2, 10, [1, 2, 3, ELLIPSIS, 9, 10]),
        (9, 10, [1, 2, ELLIPSIS, 8, 9, 10]),
        (5, 10, [1, ELLIPSIS, 4, 5, 6, ELLIPSIS, 10]),
    ],
)
def test_generate_pagination(current, total, expected):
    assert generate_pagination(current, total) == expected


def test_get_page_defaults(app):
    with app.test_request_context("/"):
        assert get_page() == 1


def test_get_page_reads_query_string(app):
    with app.test_request_context("/?page=3"):
        assert get_page() == 3


@pytest.mark.parametrize("raw", ["0", "-2", "abc"])
def test_get_page_rejects_invalid_values(app, raw):
    with app.test_request_context(f"/?page={raw}"):
        assert get_page() == 1


def test_build_pagination_args_keeps_query_without_page(app):
    with app.test_request_context("/?page=3&query=lee"):
        args = build_pagination_args()
    assert args == {"query": "lee"}


def test_build_pagination_args_preserves_list_values(app):
    with app.test_request_context("/?status=paid&status=pending"):
        args = build_pagination_args()
    assert args["status"] == ["paid", "pending"]
