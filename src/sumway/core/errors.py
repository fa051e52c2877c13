"""
Module: core.errors

Purpose:
    Root exception for every failure Sumway raises on purpose. Each layer
    derives its own error type from it so front ends can catch one class.

Used By:
    - core.schemas.validator: ValidationError
    - engine.errors: EngineError
    - gradebook.controller: GradebookError
    - storage.store: StorageError
    - output: ExportError
"""


class SumwayError(Exception):
    """Base class for all Sumway errors."""
    pass
