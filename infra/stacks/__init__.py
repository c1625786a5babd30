from .uppercase_api_stack import UppercaseApiStack

__all__ = [
    "UppercaseApiStack",
]
