# -*- coding: utf-8 -*-
"""
命令行接口模块
提供 ping-command 命令入口
"""

import sys
import argparse
from typing import Optional

from .config_loader import ConfigLoader
from .ping_session import PingSession
from .ssh_client import SSHClient


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ping-command',
        description='Ping 往返时延统计工具',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用示例:
  ping-command 223.5.5.5                        # 本机 ping 4 次，生成 PDF 报告
  ping-command 223.5.5.5 -c 20 -i 0.5 -f txt    # 20 次，间隔 0.5 秒，TXT 报告
  ping-command 223.5.5.5 --csv                  # 额外导出事件明细 CSV
  ping-command 223.5.5.5 --servers servers.xlsx --via 10.0.0.1
                                                # 通过 SSH 在 10.0.0.1 上执行 ping
  python -m ping_command 223.5.5.5

配置文件格式 (Excel, 仅 --via 时需要):
  - ip: 服务器IP地址 (必需)
  - user: SSH用户名 (可选，默认为root)
  - pass: SSH密码 (可选)
  - port: SSH端口 (可选，默认为22)
        """
    )

    parser.add_argument('host', metavar='HOST', help='目标主机')
    parser.add_argument(
        '-c', '--count',
        type=int,
        default=PingSession.DEFAULT_COUNT,
        help=f'探测次数 (默认: {PingSession.DEFAULT_COUNT})'
    )
    parser.add_argument(
        '-i', '--interval',
        type=float,
        default=PingSession.DEFAULT_INTERVAL,
        help=f'探测间隔秒数 (默认: {PingSession.DEFAULT_INTERVAL})'
    )
    parser.add_argument(
        '-o', '--output',
        default='results',
        help='测试结果输出目录 (默认: results)'
    )
    parser.add_argument(
        '-f', '--format',
        choices=['pdf', 'txt'],
        default='pdf',
        help='报告输出格式 (默认: pdf)'
    )
    parser.add_argument(
        '--csv',
        action='store_true',
        help='额外导出事件明细 CSV'
    )
    parser.add_argument(
        '--servers',
        default=None,
        help='SSH 服务器配置文件 (Excel格式)'
    )
    parser.add_argument(
        '--via',
        default=None,
        help='在该 SSH 服务器上执行 ping（需要 --servers）'
    )
    return parser


def _connect_vantage(servers_file: str, via: str) -> Optional[SSHClient]:
    """按配置连接 SSH 出发点，失败返回 None"""
    loader = ConfigLoader(servers_file)
    servers = loader.load_config()
    if not loader.validate_config(servers):
        return None

    server = loader.find_server(servers, via)
    if server is None:
        print(f"错误: 配置文件中没有服务器 {via}")
        return None

    client = SSHClient(
        host=server['ip'],
        username=server['user'],
        password=server['password'],
        port=server['port'],
    )
    if not client.connect():
        print(f"✗ 无法连接到服务器 {server['ip']}")
        return None
    print(f"✓ 已连接: {server['ip']} ({client.get_hostname()})")
    return client


def main(argv=None) -> int:
    """主函数 - 命令行入口"""
    args = build_parser().parse_args(argv)

    if args.via and not args.servers:
        print("错误: --via 需要同时指定 --servers")
        return 1

    print("\n" + "="*80)
    print("Ping 往返时延统计".center(80))
    print("="*80)
    print(f"目标主机: {args.host}")
    print(f"探测出发点: {args.via or 'localhost'}")
    print(f"输出目录: {args.output}")
    print("="*80 + "\n")

    ssh_client = None
    try:
        session_kwargs = {}
        if args.via:
            ssh_client = _connect_vantage(args.servers, args.via)
            if ssh_client is None:
                return 1
            # 远程服务器按 unix 处理
            session_kwargs = {
                'runner': ssh_client.ping_runner(),
                'family': 'unix',
                'vantage': f"{args.via} ({ssh_client.get_hostname()})",
            }

        session = PingSession(
            args.host,
            args.output,
            count=args.count,
            interval=args.interval,
            **session_kwargs
        )

        try:
            session.run()
        except KeyboardInterrupt:
            print("\n\n收到用户中断信号，正在停止...")
            session.stop()

        print("\n" + str(session.events) + "\n")
        for stats in session.events.success_round_trip_statistics()[-1:]:
            print("最近一次时延 (ms):")
            print(str(stats) + "\n")

        # 报告（无论是正常结束还是中断都要生成）
        report_file = session.generate_report(report_format=args.format)

        print("="*80)
        print("测试完成")
        print("="*80)
        print(f"测试报告已保存: {report_file}")
        if args.csv:
            print(f"事件明细已保存: {session.write_csv()}")
        print(f"会话日志: {session.log_file}")
        print("="*80 + "\n")

        return 0

    except (FileNotFoundError, ValueError) as e:
        print(f"\n错误: {str(e)}")
        return 1
    except Exception as e:
        print(f"\n发生错误: {str(e)}")
        import traceback
        traceback.print_exc()
        return 1
    finally:
        if ssh_client:
            ssh_client.close()


if __name__ == "__main__":
    sys.exit(main())
