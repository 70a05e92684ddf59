# -*- coding: utf-8 -*-
"""
文件操作相关 API 路由

所有路由都需要有效的 Bearer Token
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status

from filedesk.api.deps import get_current_user, get_file_service
from filedesk.models.auth import MessageResponse
from filedesk.models.file import FileEntry, FolderCreate, ItemDelete, UploadResponse
from filedesk.services.file_service import FileService


router = APIRouter(
    prefix="/api",
    tags=["文件"],
    dependencies=[Depends(get_current_user)]
)


@router.get("/list", response_model=List[FileEntry])
def list_files(
    path: Optional[str] = Query("", description="目录相对路径"),
    service: FileService = Depends(get_file_service)
):
    """
    列出目录下的文件和子目录

    Args:
        path: 目录相对路径
        service: 文件服务

    Returns:
        List[FileEntry]: 目录条目列表
    """
    return service.list_entries(path)


@router.post("/folder", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def create_folder(
    folder_data: FolderCreate,
    service: FileService = Depends(get_file_service)
):
    """
    创建目录

    Args:
        folder_data: 目录创建数据
        service: 文件服务

    Returns:
        MessageResponse: 操作结果
    """
    service.create_folder(folder_data.path, folder_data.folder_name)
    return MessageResponse(message="Folder created successfully")


@router.post("/upload", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
def upload_file(
    file: UploadFile = File(...),
    path: Optional[str] = Form(""),
    service: FileService = Depends(get_file_service)
):
    """
    上传文件，同名文件默认覆盖

    Args:
        file: 上传的文件
        path: 目标目录相对路径
        service: 文件服务

    Returns:
        UploadResponse: 上传结果
    """
    filename = service.upload(path, file.filename, file.file)
    return UploadResponse(
        message=f'File "{filename}" uploaded successfully',
        filename=filename
    )


@router.delete("/delete", response_model=MessageResponse)
def delete_item(
    delete_data: ItemDelete,
    service: FileService = Depends(get_file_service)
):
    """
    删除文件或目录

    Args:
        delete_data: 删除数据，type 为 folder 时递归删除
        service: 文件服务

    Returns:
        MessageResponse: 操作结果
    """
    service.delete(delete_data.path, delete_data.name, delete_data.type)
    return MessageResponse(message=f'"{delete_data.name}" deleted successfully')


@router.api_route(
    "/{rest_of_path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False
)
def unknown_endpoint(rest_of_path: str):
    """/api 下不存在的路径，先经过 Token 校验再返回 404"""
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
