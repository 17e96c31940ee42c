"""Domain errors raised by the service layer and mapped to HTTP responses by the views"""


class FintracksError(Exception):
    """Base class for business-rule violations"""
    status_code = 400

    def __init__(self, message=None):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__


class InsufficientStock(FintracksError):
    """Stok tidak mencukupi"""

    def __init__(self, variant, required, available):
        self.variant = variant
        self.required = required
        self.available = available
        super().__init__(
            f"Stok tidak mencukupi untuk {variant}. Tersedia: {available}, Dibutuhkan: {required}"
        )


class SaleHasAdjustments(FintracksError):
    """Penjualan memiliki penyesuaian dan tidak dapat dihapus"""
    status_code = 409


class InvalidOperation(FintracksError):
    """Operasi tidak valid"""
