from __future__ import annotations


class InvalidParameterError(ValueError):
    """
    Raised when an indicator period violates its minimum bound.

    Related: ..specifications.pmo_params,
      ...adapters.outbound.roc.close_roc_source
    """

    def __init__(self, message: str, *, parameter: str, value: object) -> None:
        super().__init__(message)
        self.parameter = parameter
        self.value = value
