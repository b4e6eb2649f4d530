from typing import Any


class BaseAlexandriaException(Exception):
    """Base class for all Exceptions in the Alexandria metadata pipeline."""

    def __init__(self, message: str | None = None):
        """Initializes a new instance of BaseAlexandriaException class

        :param message: String containing description of the exception that occurred
        """
        super().__init__(message)
        self.message = message

    def __getstate__(self) -> dict[str, Any]:
        return {"dict": self.__dict__, "args": self.args}

    def __setstate__(self, state: dict[str, Any] | None) -> None:
        # state is always a dict from __getstate__, but the signature must
        # accept None to match BaseException.__setstate__
        assert state is not None
        self.__dict__.update(state["dict"])
        self.args = state["args"]

    def __reduce__(self) -> tuple[Any, ...]:
        state = self.__getstate__()
        return self.__class__.__new__, (self.__class__,), state


class AlexandriaValueError(BaseAlexandriaException, ValueError): ...


class AlexandriaTypeError(BaseAlexandriaException, TypeError): ...


class ConfigurationError(BaseAlexandriaException):
    """The static configuration of the pipeline, or the configuration
    carried by a single record, is missing or obviously wrong.

    Processing of the current row stops, but other rows are unaffected.
    """


class UnknownTransformer(ConfigurationError):
    def __init__(self, name: str, key: str | None = None):
        message = f"Unknown transformer: {name}"
        if key is not None:
            message += f" (field: {key})"
        super().__init__(message)
        self.name = name
        self.key = key


class InvalidFieldSpecification(ConfigurationError): ...


class MissingAccessPolicy(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("No access policy defined")


class InvalidAccessPolicy(ConfigurationError):
    def __init__(self, shorthand: str | None):
        super().__init__(f"Invalid access policy: {shorthand}")
        self.shorthand = shorthand


class RowError(AlexandriaValueError):
    """A problem with the data in a single row of tabular metadata.

    :param field: The attribute key the problem was found in, if known.
    :param line_number: The line of the source file the row came from, if known.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        line_number: int | None = None,
    ):
        super().__init__(message)
        self.field = field
        self.line_number = line_number

    def __str__(self) -> str:
        context = []
        if self.field is not None:
            context.append(f"field: {self.field}")
        if self.line_number is not None:
            context.append(f"line: {self.line_number}")
        if not context:
            return str(self.message)
        return f"{self.message} ({', '.join(context)})"


class CoercionError(RowError):
    def __init__(
        self,
        field: str,
        value: str,
        expected: str,
        line_number: int | None = None,
    ):
        super().__init__(
            f"Could not parse {value!r} as {expected}",
            field=field,
            line_number=line_number,
        )
        self.value = value
        self.expected = expected


class MalformedRowError(RowError): ...


class EncodingError(AlexandriaTypeError):
    """An export record holds a value the crosswalk encoders cannot serialize."""

    def __init__(self, field: str, value: Any):
        super().__init__(
            f"Unsupported value of type {type(value).__name__} in field {field}"
        )
        self.field = field
        self.value = value


class UnknownMetadataFormat(AlexandriaValueError):
    def __init__(self, prefix: str):
        super().__init__(f"Unknown metadata format: {prefix}")
        self.prefix = prefix
