# -*- coding: utf-8 -*-
"""
会话日志记录模块
为每个 ping 会话保存独立的日志文件
"""

import os
from datetime import datetime
from typing import TextIO

from .event import Event


class SessionLogger:
    """会话日志记录器 - 每个目标主机一个独立的日志文件"""

    def __init__(self, output_dir: str, session_dir: str, host: str, vantage: str = 'localhost'):
        """
        初始化会话日志记录器

        Args:
            output_dir: 输出目录
            session_dir: 本次测试的会话目录名
            host: 目标主机
            vantage: 探测出发点（本机或 SSH 服务器）
        """
        self.host = host
        self.vantage = vantage

        safe_filename = f"{host.replace('.', '_').replace(':', '_')}.log"
        self.log_file = os.path.join(output_dir, "sessions", session_dir, safe_filename)

        os.makedirs(os.path.dirname(self.log_file), exist_ok=True)

        self.file_handle: TextIO = open(self.log_file, 'w', encoding='utf-8', buffering=1)  # 行缓冲

        self._write_header()

    def _write_header(self):
        """写入日志文件头"""
        self.file_handle.write("="*80 + "\n")
        self.file_handle.write("Ping 会话日志\n")
        self.file_handle.write("="*80 + "\n")
        self.file_handle.write(f"目标主机: {self.host}\n")
        self.file_handle.write(f"探测出发点: {self.vantage}\n")
        self.file_handle.write(f"开始时间: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        self.file_handle.write("="*80 + "\n\n")

    def log(self, line: str):
        """
        记录一行日志

        Args:
            line: 日志内容
        """
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]  # 保留毫秒
        self.file_handle.write(f"[{timestamp}] {line}\n")

    def log_failure(self, line: str):
        """记录失败的探测（带特殊标记）"""
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        self.file_handle.write(f"[{timestamp}] ⚠ {line}\n")

    def log_event(self, index: int, event: Event):
        """
        记录一次探测事件

        Args:
            index: 探测序号（从 1 开始）
            event: 探测事件
        """
        if not event.success:
            self.log_failure(f"#{index} {event.host}: 探测失败")
        elif event.round_trip_statistics is None:
            self.log(f"#{index} {event.host}: 成功（无法解析时延）")
        else:
            stats = event.round_trip_statistics
            self.log(
                f"#{index} {event.host}: 成功 "
                f"min={stats.min:.3f} avg={stats.average:.3f} "
                f"max={stats.max:.3f} stddev={stats.standard_deviation:.3f} ms"
            )

    def close(self, summary: str = None):
        """
        关闭日志文件

        Args:
            summary: 写入文件尾部的汇总文本
        """
        if self.file_handle and not self.file_handle.closed:
            self.file_handle.write("\n" + "="*80 + "\n")
            if summary:
                self.file_handle.write(summary + "\n")
            self.file_handle.write(f"结束时间: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
            self.file_handle.write("="*80 + "\n")
            self.file_handle.close()

    def get_log_file(self) -> str:
        """获取日志文件路径"""
        return self.log_file
