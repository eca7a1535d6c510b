"""
どこで: リポジトリ直下 `main.py`。
何を: zigzag のグリッドを run でプレビュー表示する。
なぜ: 動作確認用の最小エントリポイントとして利用するため。
"""

import sys

sys.path.append("src")

import logging

from gridpat import run

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run(
        {
            "columns": 6,
            "rows": 6,
            "shape_type": "zigzag",
            "shape_size": 60,
            "zigzag_vertices": 24,
            "zigzag_depth": 30,
            "fill_color": "#FFCC00",
        }
    )
