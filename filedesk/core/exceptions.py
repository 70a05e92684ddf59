# -*- coding: utf-8 -*-
"""
异常定义模块

业务层抛出的所有异常，每个异常携带对应的 HTTP 状态码
"""

from fastapi import status


class FileDeskError(Exception):
    """业务异常基类"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.message
        super().__init__(self.message)


# =============================================================================
# 400 输入校验
# =============================================================================

class ValidationError(FileDeskError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class MissingFieldError(ValidationError):
    message = "All fields are required"


class PathOutsideRootError(ValidationError):
    message = "Invalid path"


# =============================================================================
# 401 / 403 认证
# =============================================================================

class AuthError(FileDeskError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Authentication failed"


class MissingTokenError(AuthError):
    message = "Token not found or malformed"


class InvalidTokenError(AuthError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Invalid token"


class WrongPasswordError(AuthError):
    message = "Wrong password"


# =============================================================================
# 404 资源不存在
# =============================================================================

class NotFoundError(FileDeskError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class UserNotFoundError(NotFoundError):
    message = "User not found"


class FolderNotFoundError(NotFoundError):
    message = "Folder not found"


class ItemNotFoundError(NotFoundError):
    message = "Item not found"


# =============================================================================
# 409 冲突
# =============================================================================

class ConflictError(FileDeskError):
    status_code = status.HTTP_409_CONFLICT
    message = "Conflict"


class DuplicateUsernameError(ConflictError):
    message = "Username already taken"


class AlreadyExistsError(ConflictError):
    message = "Already exists"


# =============================================================================
# 413 请求体过大
# =============================================================================

class PayloadTooLargeError(FileDeskError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    message = "Payload too large"


class UploadTooLargeError(PayloadTooLargeError):
    message = "File exceeds the upload size limit"


# =============================================================================
# 500 文件系统 / 数据库
# =============================================================================

class StorageIOError(FileDeskError):
    message = "File system operation failed"


class ReadError(StorageIOError):
    message = "Failed to read directory"


class CreateError(StorageIOError):
    message = "Failed to create folder"


class UploadError(StorageIOError):
    message = "Failed to upload file"


class DeleteError(StorageIOError):
    message = "Failed to delete item"


class StoreError(FileDeskError):
    message = "Database error"


class StoreUnavailableError(StoreError):
    message = "Database unavailable"
