# -*- coding: utf-8 -*-
"""
文件服务

处理存储根目录下的文件和目录操作
"""

import os
import shutil
import logging
import tempfile
from pathlib import Path, PurePosixPath
from typing import BinaryIO, List, Optional

from filedesk.core.exceptions import (
    AlreadyExistsError,
    CreateError,
    DeleteError,
    FolderNotFoundError,
    ItemNotFoundError,
    MissingFieldError,
    PathOutsideRootError,
    ReadError,
    UploadError,
    UploadTooLargeError,
    ValidationError
)
from filedesk.models.file import FileEntry


logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024

# 上传过程中的临时文件，不出现在目录列表中
PARTIAL_PREFIX = ".upload-"
PARTIAL_SUFFIX = ".part"


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


# 与普通 open(..., "wb") 写入的文件权限一致
FILE_MODE = 0o666 & ~_current_umask()


def is_partial_upload(name: str) -> bool:
    """是否为上传中的临时文件名"""
    return name.startswith(PARTIAL_PREFIX) and name.endswith(PARTIAL_SUFFIX)


class FileService:
    """文件服务"""

    def __init__(
        self,
        storage_path: str = "uploads",
        max_upload_size: int = 104857600,
        overwrite: bool = True,
        sanitize_filenames: bool = False
    ):
        """
        初始化文件服务，存储目录不存在时自动创建

        Args:
            storage_path: 存储根目录
            max_upload_size: 单个上传文件的最大字节数
            overwrite: 上传同名文件时是否覆盖
            sanitize_filenames: 是否去掉上传文件名中的目录部分
        """
        self.root = Path(storage_path).resolve()
        self.root.mkdir(parents=True, exist_ok=True)
        self.max_upload_size = max_upload_size
        self.overwrite = overwrite
        self.sanitize_filenames = sanitize_filenames

    def resolve(self, relative_path: Optional[str] = "", *names: str) -> Path:
        """
        将相对路径解析为存储目录下的绝对路径

        Args:
            relative_path: 相对于存储根目录的路径
            names: 追加的名称

        Returns:
            Path: 规范化后的绝对路径

        Raises:
            PathOutsideRootError: 解析结果不在存储根目录内
        """
        relative_path = (relative_path or "").lstrip("/\\")
        target = self.root.joinpath(relative_path, *names).resolve()

        if target != self.root and self.root not in target.parents:
            logger.warning(f"拒绝越界路径: {relative_path!r} {names!r}")
            raise PathOutsideRootError()

        return target

    def list_entries(self, relative_path: Optional[str] = "") -> List[FileEntry]:
        """
        列出目录下的文件和子目录

        顺序与目录遍历顺序一致，上传中的临时文件不列出

        Args:
            relative_path: 目录相对路径

        Returns:
            List[FileEntry]: 目录条目列表
        """
        target = self.resolve(relative_path)

        if not target.is_dir():
            raise FolderNotFoundError()

        try:
            return [
                FileEntry(name=item.name, type="folder" if item.is_dir() else "file")
                for item in target.iterdir()
                if not is_partial_upload(item.name)
            ]
        except OSError as e:
            logger.error(f"读取目录失败: {target}: {e}")
            raise ReadError() from e

    def create_folder(self, relative_path: Optional[str], folder_name: Optional[str]) -> Path:
        """
        创建目录，父目录不存在时一并创建

        Args:
            relative_path: 父目录相对路径
            folder_name: 目录名称

        Returns:
            Path: 新目录的绝对路径
        """
        if not folder_name:
            raise MissingFieldError("Folder name is required")
        if is_partial_upload(folder_name):
            raise ValidationError("Invalid folder name")

        target = self.resolve(relative_path, folder_name)

        if target.exists():
            raise AlreadyExistsError("Folder already exists")

        try:
            target.mkdir(parents=True)
        except FileExistsError as e:
            raise AlreadyExistsError("Folder already exists") from e
        except OSError as e:
            logger.error(f"创建目录失败: {target}: {e}")
            raise CreateError() from e

        logger.info(f"创建目录: {target}")
        return target

    def upload(self, relative_path: Optional[str], filename: Optional[str], stream: BinaryIO) -> str:
        """
        保存上传的文件

        先写入同目录下的临时文件，完成后再替换到目标位置

        Args:
            relative_path: 目标目录相对路径，不存在时自动创建
            filename: 客户端提供的文件名
            stream: 文件内容

        Returns:
            str: 保存使用的文件名
        """
        if not filename:
            raise MissingFieldError("File is required")

        name = filename
        if self.sanitize_filenames:
            name = PurePosixPath(filename.replace("\\", "/")).name

        if name in ("", ".", "..") or is_partial_upload(name):
            raise ValidationError("Invalid file name")

        destination = self.resolve(relative_path, name)

        if destination.is_dir():
            raise AlreadyExistsError(f'A folder named "{name}" already exists')
        if destination.exists() and not self.overwrite:
            raise AlreadyExistsError(f'File "{name}" already exists')

        tmp_path = None
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=destination.parent, prefix=PARTIAL_PREFIX, suffix=PARTIAL_SUFFIX
            )
            written = 0
            with os.fdopen(fd, "wb") as buffer:
                while True:
                    chunk = stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_upload_size:
                        raise UploadTooLargeError(
                            f"File exceeds the upload size limit ({self.max_upload_size} bytes)"
                        )
                    buffer.write(chunk)
            os.chmod(tmp_path, FILE_MODE)
            os.replace(tmp_path, destination)
            tmp_path = None
        except OSError as e:
            logger.error(f"文件上传失败: {destination}: {e}")
            raise UploadError() from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)

        logger.info(f"上传文件: {destination} ({written} bytes)")
        return name

    def delete(self, relative_path: Optional[str], name: Optional[str], item_type: Optional[str] = "file") -> None:
        """
        删除文件或目录

        Args:
            relative_path: 父目录相对路径
            name: 文件或目录名称
            item_type: "folder" 时递归删除目录，否则删除单个文件
        """
        if not name:
            raise MissingFieldError("Name is required")

        target = self.resolve(relative_path, name)

        if target == self.root:
            raise ValidationError("Cannot delete the storage root")

        if not target.exists():
            raise ItemNotFoundError()

        try:
            if item_type == "folder":
                shutil.rmtree(target)
            else:
                target.unlink()
        except FileNotFoundError as e:
            raise ItemNotFoundError() from e
        except OSError as e:
            logger.error(f"删除失败: {target}: {e}")
            raise DeleteError() from e

        logger.info(f"删除{'目录' if item_type == 'folder' else '文件'}: {target}")
