# -*- coding: utf-8 -*-
"""
配置文件加载模块
从 Excel 文件读取 SSH 探测出发点（vantage server）配置
"""

import os
from typing import Dict, List, Optional

import pandas as pd


class ConfigLoader:
    """配置加载器"""

    DEFAULT_USER = 'root'
    DEFAULT_PORT = 22

    def __init__(self, excel_path: str):
        """
        初始化配置加载器

        Args:
            excel_path: Excel 配置文件路径
        """
        self.excel_path = excel_path

    def load_config(self) -> List[Dict]:
        """
        从 Excel 加载配置

        Returns:
            服务器配置列表，每个元素包含:
            - ip: 服务器IP
            - user: 用户名（默认 root）
            - password: 密码（默认为空）
            - port: SSH 端口（默认 22）
        """
        if not os.path.exists(self.excel_path):
            raise FileNotFoundError(f"配置文件不存在: {self.excel_path}")

        df = pd.read_excel(self.excel_path)

        required_columns = ['ip']
        for col in required_columns:
            if col not in df.columns:
                raise ValueError(f"配置文件缺少必需列: {col}")

        servers = []

        for _, row in df.iterrows():
            # 跳过空行
            if pd.isna(row['ip']):
                continue

            servers.append({
                'ip': str(row['ip']).strip(),
                'user': self._cell(df, row, 'user', self.DEFAULT_USER),
                'password': self._cell(df, row, 'pass', ''),
                'port': int(row['port']) if 'port' in df.columns and not pd.isna(row['port'])
                else self.DEFAULT_PORT,
            })

        return servers

    @staticmethod
    def _cell(df: pd.DataFrame, row: pd.Series, column: str, default: str) -> str:
        if column in df.columns and not pd.isna(row[column]):
            return str(row[column])
        return default

    def validate_config(self, servers: List[Dict]) -> bool:
        """
        验证配置有效性

        Args:
            servers: 服务器配置列表

        Returns:
            配置是否有效
        """
        if not servers:
            print("错误: 没有找到有效的服务器配置")
            return False

        for idx, server in enumerate(servers):
            if not server.get('ip'):
                print(f"错误: 第 {idx+1} 个服务器缺少IP地址")
                return False

        return True

    @staticmethod
    def find_server(servers: List[Dict], ip: str) -> Optional[Dict]:
        """按 IP 查找服务器配置"""
        for server in servers:
            if server['ip'] == ip:
                return server
        return None
