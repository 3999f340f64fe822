# -*- coding: utf-8 -*-
"""
PDF 报告生成模块
把一次 ping 会话的汇总指标和每次探测的时延整理成 PDF
"""

import math
import os
from datetime import datetime

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.lib.enums import TA_CENTER
from reportlab.platypus import (
    SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle, HRFlowable,
)
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont


# ---------------------------------------------------------------------------
# 中文字体注册（使用 reportlab 内置 CID 宋体，无需额外字体文件）
# ---------------------------------------------------------------------------
_FONT_CN_REGISTERED = False


def _ensure_font():
    """确保中文字体已注册（只注册一次）"""
    global _FONT_CN_REGISTERED
    if not _FONT_CN_REGISTERED:
        pdfmetrics.registerFont(UnicodeCIDFont(FONT_CN))
        _FONT_CN_REGISTERED = True


FONT_CN = 'STSong-Light'

COLOR_PRIMARY = colors.HexColor('#1a1a2e')
COLOR_SECONDARY = colors.HexColor('#16213e')
COLOR_TEXT = colors.HexColor('#333333')
COLOR_TEXT_LIGHT = colors.HexColor('#555555')
COLOR_TEXT_MUTED = colors.HexColor('#999999')
COLOR_DANGER = colors.HexColor('#c62828')
COLOR_DANGER_BG = colors.HexColor('#ffebee')
COLOR_BORDER = colors.HexColor('#cccccc')
COLOR_BORDER_LIGHT = colors.HexColor('#e0e0e0')


def _create_styles() -> dict:
    """创建 PDF 文档样式集"""
    styles = getSampleStyleSheet()

    styles.add(ParagraphStyle(
        name='TitleCN', fontName=FONT_CN, fontSize=22, leading=28,
        alignment=TA_CENTER, spaceAfter=6 * mm, textColor=COLOR_PRIMARY,
    ))
    styles.add(ParagraphStyle(
        name='SubTitleCN', fontName=FONT_CN, fontSize=12, leading=16,
        alignment=TA_CENTER, spaceAfter=4 * mm, textColor=COLOR_TEXT_LIGHT,
    ))
    styles.add(ParagraphStyle(
        name='SectionCN', fontName=FONT_CN, fontSize=14, leading=20,
        spaceBefore=8 * mm, spaceAfter=4 * mm, textColor=COLOR_SECONDARY,
    ))
    styles.add(ParagraphStyle(
        name='BodyCN', fontName=FONT_CN, fontSize=10, leading=15,
        spaceAfter=2 * mm, textColor=COLOR_TEXT,
    ))
    return styles


def _fmt_ms(value: float) -> str:
    if math.isnan(value):
        return '-'
    return f'{value:.3f}'


def _fmt_rate(rate: float) -> str:
    """成功率显示为百分比，没有探测时显示 '-'"""
    if math.isnan(rate):
        return '-'
    return f'{rate * 100:.2f}%'


class PDFReportGenerator:
    """PDF 报告生成器"""

    def __init__(self, session, output_dir: str):
        """
        Args:
            session:    PingSession 对象（读取 host / vantage / events 等）
            output_dir: 输出目录
        """
        _ensure_font()
        self.session = session
        self.events = session.events
        self.output_dir = output_dir
        self.styles = _create_styles()
        self.timestamp = datetime.now()

    def generate(self) -> str:
        """
        生成 PDF 报告

        Returns:
            生成的 PDF 文件路径
        """
        ts = self.timestamp.strftime("%Y%m%d_%H%M%S")
        report_file = os.path.join(self.output_dir, f"ping_report_{ts}.pdf")

        doc = SimpleDocTemplate(
            report_file,
            pagesize=A4,
            leftMargin=20 * mm,
            rightMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=22 * mm,
            title="Ping 测试报告",
            author="ping-command",
            subject=f"{self.session.host} 往返时延报告",
        )

        story: list = []
        self._build_title(story)
        self._build_statistics(story)
        self._build_details(story)

        doc.build(
            story,
            onFirstPage=self._draw_header_footer,
            onLaterPages=self._draw_header_footer,
        )
        return report_file

    def _draw_header_footer(self, canvas, doc):
        """在每一页绘制页眉和页脚"""
        canvas.saveState()
        w, h = A4

        canvas.setFont(FONT_CN, 8)
        canvas.setFillColor(COLOR_TEXT_MUTED)
        canvas.drawString(20 * mm, h - 12 * mm, f"Ping 测试报告 - {self.session.host}")
        canvas.drawRightString(
            w - 20 * mm, h - 12 * mm,
            f"生成时间: {self.timestamp.strftime('%Y-%m-%d %H:%M:%S')}",
        )
        canvas.setStrokeColor(COLOR_BORDER)
        canvas.setLineWidth(0.5)
        canvas.line(20 * mm, h - 14 * mm, w - 20 * mm, h - 14 * mm)

        canvas.drawCentredString(w / 2, 12 * mm, f"- {canvas.getPageNumber()} -")
        canvas.line(20 * mm, 16 * mm, w - 20 * mm, 16 * mm)
        canvas.restoreState()

    def _build_title(self, story: list):
        """标题 + 基本信息"""
        story.append(Spacer(1, 10 * mm))
        story.append(Paragraph("Ping 测试报告", self.styles['TitleCN']))
        story.append(Paragraph(
            f"生成时间: {self.timestamp.strftime('%Y-%m-%d %H:%M:%S')}",
            self.styles['SubTitleCN'],
        ))

        info = [
            ['目标主机', self.session.host],
            ['探测出发点', self.session.vantage],
            ['会话目录', self.session.session_dir],
        ]
        t = Table(info, colWidths=[50 * mm, 100 * mm])
        t.setStyle(TableStyle([
            ('FONT', (0, 0), (-1, -1), FONT_CN, 10),
            ('TEXTCOLOR', (0, 0), (0, -1), COLOR_TEXT_LIGHT),
            ('ALIGN', (0, 0), (0, -1), 'RIGHT'),
            ('ALIGN', (1, 0), (1, -1), 'LEFT'),
            ('TOPPADDING', (0, 0), (-1, -1), 4),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
        ]))
        story.append(t)
        story.append(Spacer(1, 6 * mm))
        story.append(HRFlowable(width="100%", thickness=1, color=COLOR_BORDER_LIGHT))

    def _build_statistics(self, story: list):
        """测试统计"""
        story.append(Paragraph("测试统计", self.styles['SectionCN']))

        data = [
            ['指标', '数值'],
            ['探测次数', str(self.events.attempt_count())],
            ['成功次数', str(self.events.success_count())],
            ['失败次数', str(self.events.failure_count())],
            ['成功率', _fmt_rate(self.events.success_rate())],
        ]
        t = Table(data, colWidths=[60 * mm, 60 * mm])
        style_cmds = [
            ('FONT', (0, 0), (-1, -1), FONT_CN, 10),
            ('BACKGROUND', (0, 0), (-1, 0), COLOR_PRIMARY),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
            ('GRID', (0, 0), (-1, -1), 0.5, COLOR_BORDER),
            ('TOPPADDING', (0, 0), (-1, -1), 6),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
        ]
        if self.events.failure_count() > 0:
            style_cmds.append(('BACKGROUND', (0, 3), (-1, 3), COLOR_DANGER_BG))
            style_cmds.append(('TEXTCOLOR', (0, 3), (-1, 3), COLOR_DANGER))
        t.setStyle(TableStyle(style_cmds))
        story.append(t)

    def _build_details(self, story: list):
        """每次探测的时延（ms）"""
        story.append(Paragraph("详细测试结果", self.styles['SectionCN']))

        if not len(self.events):
            story.append(Paragraph("(无探测记录)", self.styles['BodyCN']))
            return

        rows = [['#', '时间', '结果', 'min', 'average', 'max', 'stddev']]
        failed_rows = []
        for idx, event in enumerate(self.events, 1):
            ts = event.timestamp.strftime('%H:%M:%S') \
                if isinstance(event.timestamp, datetime) else str(event.timestamp)
            stats = event.round_trip_statistics
            if stats is None:
                values = ['-'] * 4
            else:
                values = [_fmt_ms(stats.min), _fmt_ms(stats.average),
                          _fmt_ms(stats.max), _fmt_ms(stats.standard_deviation)]
            if not event.success:
                failed_rows.append(idx)
            rows.append([str(idx), ts, '成功' if event.success else '失败', *values])

        t = Table(rows, colWidths=[12 * mm, 28 * mm, 20 * mm, 25 * mm, 25 * mm, 25 * mm, 25 * mm],
                  repeatRows=1)
        style_cmds = [
            ('FONT', (0, 0), (-1, -1), FONT_CN, 8),
            ('BACKGROUND', (0, 0), (-1, 0), COLOR_SECONDARY),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
            ('GRID', (0, 0), (-1, -1), 0.3, COLOR_BORDER_LIGHT),
            ('TOPPADDING', (0, 0), (-1, -1), 3),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 3),
        ]
        for row in failed_rows:
            style_cmds.append(('TEXTCOLOR', (0, row), (-1, row), COLOR_DANGER))
        t.setStyle(TableStyle(style_cmds))
        story.append(t)
