# -*- coding: utf-8 -*-
"""
文件相关数据模型
"""

from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


EntryType = Literal["file", "folder"]


class FileEntry(BaseModel):
    """目录条目"""
    name: str
    type: EntryType


class FolderCreate(BaseModel):
    """创建目录请求模型"""
    path: Optional[str] = Field(default="", description="父目录相对路径")
    folder_name: Optional[str] = Field(default=None, alias="folderName", description="目录名称")

    model_config = ConfigDict(populate_by_name=True)


class ItemDelete(BaseModel):
    """删除请求模型"""
    path: Optional[str] = Field(default="", description="父目录相对路径")
    name: Optional[str] = Field(default=None, description="文件或目录名称")
    type: Optional[str] = Field(default="file", description="file 或 folder")


class UploadResponse(BaseModel):
    """上传响应模型"""
    message: str
    filename: str
