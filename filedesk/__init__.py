# -*- coding: utf-8 -*-
"""
FileDesk - 账户认证与文件夹管理后端

版本: v1.0.0
"""

__version__ = "1.0.0"
__description__ = "账户认证与文件夹管理后端"
