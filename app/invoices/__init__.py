from app.invoices.routes import invoices_bp

__all__ = ["invoices_bp"]
