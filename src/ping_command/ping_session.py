# -*- coding: utf-8 -*-
"""
Ping 会话模块
对单个目标主机顺序执行多次探测，累积事件并生成报告
"""

import os
import time
from datetime import datetime
from typing import Callable, List

from .events import Events
from .ping import ping_command, probe
from .session_logger import SessionLogger


class PingSession:
    """单目标 ping 会话"""

    DEFAULT_COUNT = 4
    DEFAULT_INTERVAL = 1.0  # 探测间隔（秒）

    def __init__(self, host: str, output_dir: str,
                 count: int = None, interval: float = None,
                 runner: Callable[[List[str]], str] = ping_command,
                 family: str = None, vantage: str = 'localhost'):
        """
        初始化会话

        Args:
            host: 目标主机
            output_dir: 输出目录
            count: 探测次数（默认 4）
            interval: 探测间隔秒数（默认 1.0）
            runner: 执行 ping 的函数（本地 subprocess 或 SSH）
            family: 目标出发点的操作系统族
            vantage: 探测出发点名称（仅用于日志和报告）
        """
        self.host = host
        self.output_dir = output_dir
        self.count = count if count is not None else self.DEFAULT_COUNT
        self.interval = interval if interval is not None else self.DEFAULT_INTERVAL
        self.runner = runner
        self.family = family
        self.vantage = vantage
        self.events = Events()
        self.running = False
        self.start_time = None
        self.end_time = None
        self.log_file = None

        # 为本次会话创建带时间戳的目录
        self.session_dir = datetime.now().strftime("%Y%m%d_%H%M%S")

        os.makedirs(output_dir, exist_ok=True)
        os.makedirs(os.path.join(output_dir, "sessions", self.session_dir), exist_ok=True)

    def run(self):
        """执行探测，直到完成 count 次或被 stop() 中断"""
        self.running = True
        self.start_time = datetime.now()
        session_logger = SessionLogger(self.output_dir, self.session_dir, self.host, self.vantage)
        self.log_file = session_logger.get_log_file()

        print(f"开始 ping {self.host} (出发点: {self.vantage}, 次数: {self.count}, 间隔: {self.interval} 秒)")

        try:
            for index in range(1, self.count + 1):
                if not self.running:
                    break

                event = probe(self.host, runner=self.runner, family=self.family)
                self.events.append(event)
                session_logger.log_event(index, event)
                self._print_event(index, event)

                if index < self.count and self.running:
                    time.sleep(self.interval)
        finally:
            self.running = False
            self.end_time = datetime.now()
            session_logger.close(str(self.events))

    def stop(self):
        """停止会话（在当前探测结束后生效）"""
        self.running = False

    def _print_event(self, index: int, event):
        if not event.success:
            print(f"✗ #{index} {self.host}: 探测失败")
        elif event.round_trip_statistics is None:
            print(f"✓ #{index} {self.host}: 成功（无法解析时延）")
        else:
            print(f"✓ #{index} {self.host}: avg {event.round_trip_statistics.average:.3f} ms")

    def generate_report(self, report_format: str = 'pdf') -> str:
        """
        生成测试报告

        Args:
            report_format: 报告格式 ('pdf' 或 'txt')

        Returns:
            报告文件路径
        """
        if report_format == 'pdf':
            return self._generate_pdf_report()
        return self._generate_txt_report()

    def _generate_pdf_report(self) -> str:
        from .pdf_report import PDFReportGenerator

        generator = PDFReportGenerator(
            session=self,
            output_dir=self.output_dir,
        )
        return generator.generate()

    def _generate_txt_report(self) -> str:
        """生成 TXT 格式报告"""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        report_file = os.path.join(self.output_dir, f"ping_report_{timestamp}.txt")

        with open(report_file, 'w', encoding='utf-8') as f:
            f.write("="*80 + "\n")
            f.write("Ping 测试报告\n")
            f.write("="*80 + "\n")
            f.write(f"生成时间: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
            f.write(f"目标主机: {self.host}\n")
            f.write(f"探测出发点: {self.vantage}\n")
            if self.start_time and self.end_time:
                f.write(f"测试时长: {(self.end_time - self.start_time).total_seconds():.1f} 秒\n")
            if self.log_file:
                f.write(f"完整会话日志: {self.log_file}\n")
            f.write("\n")

            f.write("="*80 + "\n")
            f.write("测试统计\n")
            f.write("="*80 + "\n")
            f.write(str(self.events) + "\n")
            f.write(f"failure count: {self.events.failure_count()}\n")
            f.write("\n")

            f.write("="*80 + "\n")
            f.write("详细测试结果\n")
            f.write("="*80 + "\n")

            if not len(self.events):
                f.write("(无探测记录)\n")

            for idx, event in enumerate(self.events, 1):
                ts = event.timestamp.strftime('%Y-%m-%d %H:%M:%S') \
                    if isinstance(event.timestamp, datetime) else str(event.timestamp)
                status = "成功" if event.success else "失败"
                f.write(f"\n[探测 {idx}/{len(self.events)}] {ts} {status}\n")
                if event.round_trip_statistics is not None:
                    f.write(str(event.round_trip_statistics) + "\n")
                elif event.success:
                    f.write("(无法解析时延)\n")
                f.write("-"*80 + "\n")

        return report_file

    def write_csv(self) -> str:
        """导出事件明细为 CSV，返回文件路径"""
        csv_file = os.path.join(self.output_dir, "sessions", self.session_dir, "events.csv")
        self.events.to_dataframe().to_csv(csv_file, index=False)
        return csv_file
