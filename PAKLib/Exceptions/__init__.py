class PAKLibException(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RecognitionMismatchException(PAKLibException):
    """Raised during recognition when the container does not look like the decoder's format."""

    pass


class StructuralException(PAKLibException):
    pass


class BadDataOffsetException(StructuralException):
    def __init__(self, path: str, offset: int, size: int, container_size: int):
        message = f"Entry {path!r} points outside of the archive! (0x{offset:08X} + 0x{size:X} > 0x{container_size:X})"
        super().__init__(message)
        self.path = path
        self.offset = offset
        self.size = size
        self.container_size = container_size


class EndOfStreamException(StructuralException):
    def __init__(self, expected: int, got: int):
        message = f"Unexpected end of stream! (Expected {expected} bytes got {got}.)"
        super().__init__(message)
        self.expected = expected
        self.got = got


class MalformedStreamException(StructuralException):
    pass


class TextDecodingException(StructuralException):
    def __init__(self, raw: bytes, encoding: str):
        message = f"Could not decode {raw!r} as {encoding}"
        super().__init__(message)
        self.raw = raw
        self.encoding = encoding


class ConfigurationException(PAKLibException):
    pass


class ReconstructionFailureException(PAKLibException):
    pass


class UnrecognizedFormatException(PAKLibException):
    def __init__(self, name: str = "input"):
        super().__init__(f"The {name} is not recognized by any of the known decoders")
        self.name = name


class UnknownFormatException(PAKLibException):
    def __init__(self, format_name: str):
        super().__init__(f"Unknown format: {format_name}")
        self.format_name = format_name


__all__ = [
    "PAKLibException",
    "RecognitionMismatchException",
    "StructuralException",
    "BadDataOffsetException",
    "EndOfStreamException",
    "MalformedStreamException",
    "TextDecodingException",
    "ConfigurationException",
    "ReconstructionFailureException",
    "UnrecognizedFormatException",
    "UnknownFormatException",
]
