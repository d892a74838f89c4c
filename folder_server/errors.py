# Folder Server v.0.1.0
# Copyright (C) 2025 EGT Maks Tymoshenko (Ukraine)
# License: MIT
# Summary: Request Failures And The Status Codes They Map To.


class FolderServerError(Exception):
    """Base Error; Terminal For The Request That Raised It."""

    status = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFound(FolderServerError):
    status = 404

    def __init__(self, message: str = "File not found") -> None:
        super().__init__(message)


class ReadFailure(FolderServerError):
    """Directory Or File Exists But Could Not Be Read."""

    status = 500


class RenderFailure(FolderServerError):
    """Page Could Not Be Built From Its Model."""

    status = 500
