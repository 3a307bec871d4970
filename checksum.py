# 原作のチェックサム関連。
#
# 以下の関数は int と z3 の BitVec (8bit) のどちらに対しても動作する。
# 演算は mod 256 で行い、最終結果を 6bit に切り詰める。

from dataclasses import dataclass
from functools import reduce
import operator

# チェックサムの各値の最大値。
# バイト列が短くチェックサムが計算/格納できない場合、この値が使われる。
CHECKSUM_MAX = 0x3F

# チェックサム格納領域のバイト数。
CHECKSUM_LEN = 2

# ゲーム状態をシリアライズしたバイト列のチェックサム。
@dataclass(frozen=True)
class Checksum:
    # mod 64 加算によるチェックサム。
    sum_add: int
    # XOR によるチェックサム。
    sum_xor: int

# バイト列のチェックサム対象部分 (先頭 2 バイトより後) からチェックサムを求める。
def calc_checksum(payload):
    if not payload:
        return Checksum(CHECKSUM_MAX, CHECKSUM_MAX)

    sum_add = sum(payload) & 0x3F
    sum_xor = reduce(operator.xor, payload)

    return Checksum(sum_add, sum_xor)

# バイト列に格納されたチェックサムを返す。
#
# バイト列は最低でも 1 バイトある。足りないビットは全て 1 として扱う。
def embedded_checksum(buf):
    assert len(buf) >= 1

    sum_add = buf[0]
    sum_xor = buf[1] if len(buf) >= 2 else CHECKSUM_MAX

    return Checksum(sum_add, sum_xor)

# バイト列のチェックサムが正しいかどうかを返す。
def checksum_is_ok(buf):
    return embedded_checksum(buf) == calc_checksum(buf[CHECKSUM_LEN:])
