# -*- coding: utf-8 -*-
"""
SSH 客户端模块
连接远程服务器，把它作为 ping 的探测出发点
"""

import shlex
import time
from typing import Callable, List, Tuple

import paramiko

from .ping import PingCommandError


class SSHClient:
    """SSH 客户端封装"""

    def __init__(self, host: str, username: str, password: str, port: int = 22):
        """
        初始化 SSH 客户端

        Args:
            host: 服务器地址
            username: 用户名
            password: 密码
            port: SSH 端口
        """
        self.host = host
        self.username = username
        self.password = password
        self.port = port
        self.client = None
        self.hostname = None

    def connect(self, timeout: int = 15, banner_timeout: int = 30, retries: int = 3) -> bool:
        """
        连接到服务器（带重试机制）

        Args:
            timeout: 连接超时时间（秒）
            banner_timeout: SSH banner 读取超时时间（秒）
            retries: 重试次数

        Returns:
            连接是否成功
        """
        last_error = None

        for attempt in range(retries):
            try:
                self.client = paramiko.SSHClient()
                self.client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
                self.client.connect(
                    hostname=self.host,
                    port=self.port,
                    username=self.username,
                    password=self.password,
                    timeout=timeout,
                    banner_timeout=banner_timeout,
                    look_for_keys=False,
                    allow_agent=False
                )

                _, stdout, _ = self.client.exec_command('hostname')
                self.hostname = stdout.read().decode('utf-8').strip()

                return True
            except (paramiko.SSHException, OSError) as e:
                last_error = e
                self.client.close()
                self.client = None

                if attempt < retries - 1:
                    wait_time = (attempt + 1) * 2  # 退避: 2s, 4s
                    time.sleep(wait_time)

        print(f"连接服务器 {self.host} 失败 (已重试 {retries} 次): {str(last_error)}")
        return False

    def get_hostname(self) -> str:
        """获取主机名"""
        return self.hostname or self.host

    def run_command(self, command: str) -> Tuple[int, str]:
        """
        执行远程命令并等待结束

        Args:
            command: 命令行

        Returns:
            (退出码, 标准输出)
        """
        if self.client is None:
            raise paramiko.SSHException(f"未连接到服务器 {self.host}")

        _, stdout, _ = self.client.exec_command(command)
        output = stdout.read().decode('utf-8', errors='replace')
        exit_status = stdout.channel.recv_exit_status()
        return exit_status, output

    def ping_runner(self) -> Callable[[List[str]], str]:
        """
        生成在远程服务器上执行 ping 的 runner

        Returns:
            runner(args) -> 标准输出，退出码非 0 或 SSH 会话异常时抛出 PingCommandError
        """
        def runner(args: List[str]) -> str:
            command = ' '.join(shlex.quote(a) for a in ['ping', *args])
            try:
                exit_status, output = self.run_command(command)
            except paramiko.SSHException as e:
                raise PingCommandError(f"远程 ping 失败: {self.host} ({e})", output='') from e
            if exit_status != 0:
                raise PingCommandError(
                    f"远程 ping 失败: {self.host} (退出码 {exit_status})",
                    returncode=exit_status,
                    output=output,
                )
            return output

        return runner

    def close(self):
        """关闭连接"""
        if self.client:
            self.client.close()
            self.client = None
