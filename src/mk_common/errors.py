"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Session
  2xxx: Durable store
  3xxx: Catalog
  4xxx: Reputation
  5xxx: Chat
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Session ---

class NotAuthenticatedError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Login required", 401)


# --- 2xxx: Durable store ---

class StorageFullError(AppError):
    def __init__(self, key: str, required: int, capacity: int) -> None:
        self.key = key
        super().__init__(
            2001,
            f"Storage full: writing {key} needs {required} of {capacity} bytes",
            507,
        )


class StoreUnavailableError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(2002, f"Store unavailable: {detail}", 503)


# --- 3xxx: Catalog ---

class ProductNotFoundError(AppError):
    def __init__(self, product_id: str) -> None:
        super().__init__(3001, f"Product not found: {product_id}", 404)


class NotListingOwnerError(AppError):
    def __init__(self, product_id: str) -> None:
        super().__init__(3002, f"Listing {product_id} belongs to another seller", 403)


class ListingAlreadySoldError(AppError):
    def __init__(self, product_id: str) -> None:
        super().__init__(3003, f"Listing already sold: {product_id}", 422)


class InvalidListingError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(3004, f"Invalid listing: {detail}", 422)


# --- 4xxx: Reputation ---

class SellerNotFoundError(AppError):
    def __init__(self, seller_id: str) -> None:
        super().__init__(4001, f"Seller not found: {seller_id}", 404)


class InvalidRatingError(AppError):
    def __init__(self, rating: int) -> None:
        super().__init__(4002, f"Rating must be between 1 and 5, got {rating}", 422)


class SelfReviewError(AppError):
    def __init__(self) -> None:
        super().__init__(4003, "Sellers cannot review themselves", 422)


# --- 5xxx: Chat ---

class EmptyMessageError(AppError):
    def __init__(self) -> None:
        super().__init__(5001, "Message needs text, an attachment or a location", 422)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
