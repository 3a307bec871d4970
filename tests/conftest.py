import sys
from pathlib import Path

# テスト対象のモジュールはリポジトリ直下にある。
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
