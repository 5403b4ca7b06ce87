from .params import encode, quote
from .serializer import deep_copy, get_by_path, set_by_path

__all__ = ["encode", "quote", "deep_copy", "get_by_path", "set_by_path"]
