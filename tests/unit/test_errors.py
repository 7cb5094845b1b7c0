"""Tests for mk_common.errors and mk_common.response."""

from unittest.mock import MagicMock

from src.mk_common.errors import (
    AppError,
    EmptyMessageError,
    InvalidRatingError,
    ListingAlreadySoldError,
    NotAuthenticatedError,
    NotListingOwnerError,
    ProductNotFoundError,
    SelfReviewError,
    SellerNotFoundError,
    StorageFullError,
    StoreUnavailableError,
)
from src.mk_common.response import ApiResponse, error_response, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.message == "Internal error"
        assert err.http_status == 500

    def test_custom_http_status(self) -> None:
        err = AppError(code=3001, message="gone", http_status=404)
        assert err.http_status == 404

    def test_is_exception(self) -> None:
        assert isinstance(AppError(code=1, message="x"), Exception)


class TestSpecificErrors:
    def test_not_authenticated(self) -> None:
        err = NotAuthenticatedError()
        assert (err.code, err.http_status) == (1001, 401)

    def test_storage_full_carries_key(self) -> None:
        err = StorageFullError("products", 6_000_000, 5_242_880)
        assert (err.code, err.http_status) == (2001, 507)
        assert err.key == "products"
        assert "products" in err.message

    def test_store_unavailable(self) -> None:
        err = StoreUnavailableError("connection refused")
        assert (err.code, err.http_status) == (2002, 503)

    def test_product_not_found(self) -> None:
        err = ProductNotFoundError("p1")
        assert (err.code, err.http_status) == (3001, 404)
        assert "p1" in err.message

    def test_not_owner(self) -> None:
        assert NotListingOwnerError("p1").http_status == 403

    def test_already_sold(self) -> None:
        assert ListingAlreadySoldError("p1").code == 3003

    def test_reputation_errors(self) -> None:
        assert SellerNotFoundError("s").http_status == 404
        assert InvalidRatingError(6).code == 4002
        assert SelfReviewError().code == 4003

    def test_empty_message(self) -> None:
        err = EmptyMessageError()
        assert (err.code, err.http_status) == (5001, 422)


class TestApiResponse:
    def test_success_defaults(self) -> None:
        resp = success_response({"x": 1})
        assert resp.code == 0
        assert resp.message == "success"
        assert resp.data == {"x": 1}
        assert resp.request_id.startswith("req_")

    def test_success_uses_request_id_from_state(self) -> None:
        request = MagicMock()
        request.state.request_id = "req_fixed"
        assert success_response(None, request).request_id == "req_fixed"

    def test_error_response(self) -> None:
        resp = error_response(3001, "Product not found: p1")
        assert isinstance(resp, ApiResponse)
        assert resp.code == 3001
        assert resp.data is None
