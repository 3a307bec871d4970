import sys

import z3

# 簡易ログ出力。
def info(s):
    print(s, file=sys.stderr)

# BitVec 変数の範囲制約を返す。
def bitvec_minmax(bv: z3.BitVecRef, min_, max_):
    return z3.And(z3.UGE(bv, min_), z3.ULE(bv, max_))

# 比較結果を z3 の論理式にする。
#
# 両辺が定数の場合、比較結果は Python の bool になるのでそれを z3 の値に変換する。
def as_bool(cond):
    if isinstance(cond, bool):
        return z3.BoolVal(cond)
    return cond
