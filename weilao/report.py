from __future__ import annotations

import io
import logging
from datetime import datetime
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from reportlab.lib import colors
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont

from .i18n import t
from .models import Inputs, Result
from .tables import breakdown_frame, summary_rows, audit_frame
from .formatting import fmt_number, fmt_wan

logger = logging.getLogger(__name__)

# reportlab's built-in CID fonts, no font files needed
CJK_FONTS = {"zh-TW": "MSung-Light", "zh-CN": "STSong-Light"}


def _font_for(lang: str) -> str:
    name = CJK_FONTS.get(lang)
    if name is None:
        return "Helvetica"
    if name not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(UnicodeCIDFont(name))
    return name


def _table_style(font: str, font_size: int = 9) -> TableStyle:
    return TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#111827")),
        ("TEXTCOLOR", (0,0), (-1,0), colors.white),
        ("FONTNAME", (0,0), (-1,-1), font),
        ("GRID", (0,0), (-1,-1), 0.25, colors.HexColor("#D1D5DB")),
        ("ROWBACKGROUNDS", (0,1), (-1,-1), [colors.whitesmoke, colors.lightgrey]),
        ("FONTSIZE", (0,0), (-1,-1), font_size),
        ("VALIGN", (0,0), (-1,-1), "MIDDLE"),
        ("PADDING", (0,0), (-1,-1), 5),
    ])


def build_pdf(inputs: Inputs, result: Result, lang: str = "zh-TW", ccy: str = "TWD") -> bytes:
    font = _font_for(lang)
    base = getSampleStyleSheet()
    styles = {
        name: ParagraphStyle(f"{name}-{font}", parent=base[name], fontName=font)
        for name in ("Title", "Heading2", "Normal")
    }
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, leftMargin=16*mm, rightMargin=16*mm, topMargin=14*mm, bottomMargin=14*mm)

    story = []
    story.append(Paragraph(escape(t(lang, "report.title")), styles["Title"]))
    site = " / ".join(s for s in (inputs.section, inputs.lot_number, inputs.zoning) if s)
    meta = f"{escape(site)} &nbsp;&nbsp;|&nbsp;&nbsp; {t(lang, 'report.generated')}: {datetime.now().strftime('%Y-%m-%d %H:%M')}"
    story.append(Paragraph(meta, styles["Normal"]))
    story.append(Spacer(1, 10))

    # Headline
    e = result.equity
    verdict = t(lang, "result.congrats") if e.is_one_for_one else t(lang, "result.notYet")
    story.append(Paragraph(
        f"{escape(t(lang, 'result.exchange'))}: {fmt_number(e.ping_exchange, 4)} &nbsp;({escape(verdict)})",
        styles["Heading2"],
    ))
    story.append(Spacer(1, 6))

    # Summary cards
    story.append(Paragraph(escape(t(lang, "report.summary")), styles["Heading2"]))
    cards = summary_rows(result, lang)
    for card, title_key in (("areas", "card.areas"), ("sales", "card.sales"), ("costs", "card.costDist"),
                            ("revenue", "card.revenue"), ("equity", "card.equity")):
        data = [[t(lang, title_key), ""]] + [[label, value] for label, value in cards[card]]
        tbl = Table(data, colWidths=[80*mm, 90*mm])
        tbl.setStyle(_table_style(font))
        story.append(tbl)
        story.append(Spacer(1, 6))

    # Fee breakdown
    story.append(Paragraph(escape(t(lang, "card.breakdown")), styles["Heading2"]))
    bd = breakdown_frame(result, lang)
    wan = t(lang, "unit.wan")
    bd_table = [[t(lang, "card.breakdown"), wan]] + [[r["label"], r["display"]] for _, r in bd.iterrows()]
    bt = Table(bd_table, colWidths=[80*mm, 90*mm])
    bt.setStyle(_table_style(font))
    story.append(bt)
    story.append(Spacer(1, 12))

    # Key inputs
    story.append(Paragraph(escape(t(lang, "report.inputs")), styles["Heading2"]))
    key_inputs = [
        [t(lang, "label.area"), f"{fmt_number(inputs.area)} {t(lang, 'unit.m2')}"],
        [t(lang, "label.bc_ratio"), f"{fmt_number(inputs.bc_ratio, 1)}%"],
        [t(lang, "label.far"), f"{fmt_number(inputs.far, 1)}%"],
        [t(lang, "label.floors"), fmt_number(inputs.floors, 0)],
        [t(lang, "label.basement"), fmt_number(inputs.basement, 0)],
        [t(lang, "label.build_cost"), f"{fmt_wan(inputs.build_cost)} {wan}"],
        [t(lang, "label.price_1f"), f"{fmt_wan(inputs.price_1f)} {wan}"],
        [t(lang, "label.price_2f"), f"{fmt_wan(inputs.price_2f)} {wan}"],
        [t(lang, "label.old_ping"), f"{fmt_number(inputs.old_ping)} {t(lang, 'unit.ping')}"],
        [t(lang, "label.sell_percent"), f"{fmt_number(inputs.sell_percent, 1)}%"],
    ]
    it = Table(key_inputs, colWidths=[80*mm, 90*mm])
    it.setStyle(_table_style(font))
    story.append(it)
    story.append(Spacer(1, 12))

    # Audit (trim to keep report compact)
    story.append(Paragraph(escape(t(lang, "report.audit")), styles["Heading2"]))
    audit_df = audit_frame(result, ccy)
    keep_sections = ["Costs", "Finance", "Revenue", "Equity"]
    audit_df = audit_df[audit_df["section"].isin(keep_sections)].head(40)
    audit_table = [["Section", "Key", "Value"]]
    for _, r in audit_df.iterrows():
        audit_table.append([str(r["section"]), str(r["key"]), str(r["display"])])
    au = Table(audit_table, repeatRows=1, colWidths=[25*mm, 80*mm, 65*mm])
    au.setStyle(_table_style(font, 8))
    story.append(au)

    doc.build(story)
    logger.debug("built %s PDF report, %d audit lines", lang, len(audit_table) - 1)
    return buf.getvalue()
