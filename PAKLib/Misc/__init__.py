from .text import DEFAULT_ENCODING, decode_text

__all__ = ["DEFAULT_ENCODING", "decode_text"]
