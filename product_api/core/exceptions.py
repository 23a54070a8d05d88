class AppError(Exception):
    """Base application error."""
    def __init__(self, message: str, *, code: str = "app_error") -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class ProductNotFoundError(AppError):
    def __init__(self, product_id: int) -> None:
        super().__init__(f"product {product_id} not found", code="not_found")
        self.product_id = product_id


class StoreTimeoutError(AppError):
    def __init__(self, operation: str, timeout: float) -> None:
        super().__init__(
            f"{operation} exceeded the {timeout:g}s query timeout", code="timeout"
        )
        self.operation = operation
        self.timeout = timeout


class InvalidPaginationError(AppError):
    def __init__(self, message: str) -> None:
        super().__init__(message, code="invalid_pagination")
