"""Exceptions raised by the matching and learning pipeline."""


class EmbeddingInputError(ValueError):
    """Raised when text handed to the embedding provider is empty or whitespace."""


class VectorDimensionError(ValueError):
    """Raised when two vectors cannot be compared (length mismatch or empty)."""

    def __init__(self, len_a: int, len_b: int):
        self.len_a = len_a
        self.len_b = len_b
        if len_a == 0 or len_b == 0:
            message = "Cannot compute cosine similarity of empty vectors"
        else:
            message = (
                f"Vector length mismatch: vec_a has {len_a} dimensions, "
                f"vec_b has {len_b}"
            )
        super().__init__(message)


class NoMeaningfulSectionsError(ValueError):
    """Raised when a resume has no section long enough to embed."""


class EmbeddingUnavailableError(RuntimeError):
    """Raised when no embedding provider is configured or the provider call fails."""


class LabelingError(RuntimeError):
    """Raised when the LLM labeler returns no usable structured label."""
