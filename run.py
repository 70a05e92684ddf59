# -*- coding: utf-8 -*-
"""
FileDesk 启动脚本

用于启动 FileDesk 后端服务
"""

import os

import uvicorn


def main():
    """主函数"""
    # 从环境变量读取配置
    host = os.getenv("FILEDESK_HOST", "0.0.0.0")
    port = int(os.getenv("FILEDESK_PORT", "3000"))

    # SSL 配置
    ssl_keyfile = os.getenv("FILEDESK_SSL_KEYFILE")
    ssl_certfile = os.getenv("FILEDESK_SSL_CERTFILE")

    print("\n" + "=" * 50)
    print("FileDesk - 账户认证与文件夹管理后端")
    print("=" * 50)
    print(f"服务地址: http://{host}:{port}")
    print(f"API 文档: http://{host}:{port}/docs")
    print("=" * 50 + "\n")

    # 启动服务器
    uvicorn.run(
        "filedesk.main:app",
        host=host,
        port=port,
        reload=os.getenv("FILEDESK_RELOAD", "false").lower() == "true",
        ssl_keyfile=ssl_keyfile,
        ssl_certfile=ssl_certfile,
    )


if __name__ == "__main__":
    main()
