from ..Exceptions import ConfigurationException, TextDecodingException

DEFAULT_ENCODING = "cp932"


def decode_text(raw: bytes, encoding: str = DEFAULT_ENCODING) -> str:
    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise TextDecodingException(raw, encoding) from e
    except LookupError as e:
        raise ConfigurationException(f"Unknown encoding: {encoding}") from e


__all__ = ["DEFAULT_ENCODING", "decode_text"]
