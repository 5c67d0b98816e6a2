from .transformer import transform_customer

__all__ = ["transform_customer"]
