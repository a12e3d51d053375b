"""Centralised Qt stylesheet definitions."""
from __future__ import annotations

import textwrap

PRIMARY_BG = "#101418"
SECONDARY_BG = "#182028"
ACCENT = "#3D8BFD"
TEXT_PRIMARY = "#FFFFFF"
TEXT_SECONDARY = "#A9B4C0"

MAIN_STYLESHEET = textwrap.dedent(
    f"""
    QWidget {{
        background-color: {PRIMARY_BG};
        color: {TEXT_SECONDARY};
        font-size: 10pt;
    }}
    QLabel#heading {{
        color: {TEXT_PRIMARY};
        font-size: 16pt;
        font-weight: 600;
    }}
    QLabel#subheading {{
        color: {TEXT_SECONDARY};
        font-size: 11pt;
    }}
    QPushButton, QToolButton {{
        background-color: transparent;
        color: {TEXT_PRIMARY};
        border: none;
        padding: 6px 12px;
    }}
    QPushButton:hover, QToolButton:hover {{
        color: {ACCENT};
    }}
    QPushButton:disabled, QToolButton:disabled {{
        color: rgba(255, 255, 255, 0.25);
    }}
    QPushButton#accent {{
        background-color: {ACCENT};
        border-radius: 14px;
        padding: 6px 18px;
    }}
    QToolButton:checked {{
        color: {ACCENT};
    }}
    QListWidget {{
        background-color: {SECONDARY_BG};
        border: none;
        border-radius: 8px;
    }}
    QListWidget::item {{
        padding: 8px;
    }}
    QListWidget::item:selected {{
        background-color: rgba(61, 139, 253, 0.25);
        color: {TEXT_PRIMARY};
    }}
    QSlider::groove:horizontal {{
        height: 6px;
        background: rgba(255, 255, 255, 0.08);
        border-radius: 3px;
    }}
    QSlider::sub-page:horizontal {{
        background: {ACCENT};
        border-radius: 3px;
    }}
    QSlider::handle:horizontal {{
        background: {TEXT_PRIMARY};
        width: 12px;
        margin: -3px 0;
        border-radius: 6px;
    }}
    """
)
