# パターンに合致する有効なパスワードを z3 で列挙する。
#
# パターン内の '?' は任意の 1 文字を表す。たとえば 'おに???'。

from dataclasses import dataclass
from typing import Optional

import z3

from checksum import CHECKSUM_LEN, calc_checksum, embedded_checksum
from password import InvalidLength, InvalidSymbol, Password, PasswordChar
from serialized import decode_codes
from util import as_bool, bitvec_minmax, info

# 任意の 1 文字を表すワイルドカード。
WILDCARD = "?"

@dataclass
class SolverConfig:
    pattern: str
    # 列挙する解の上限。None なら全て列挙する。
    max_solutions: Optional[int] = None

@dataclass
class Solution:
    passwords: list

    @property
    def count(self):
        return len(self.passwords)

def solve(config: SolverConfig):
    pattern = parse_pattern(config.pattern)

    # 枝刈り: 2 文字目が無効なら直ちに却下。
    if len(pattern) >= 2 and isinstance(pattern[1], PasswordChar):
        if Password.is_invalid_second_char(pattern[1]):
            info("second char can never be valid")
            return Solution(passwords=[])

    solver = z3.Solver()

    codes, unknowns = make_codes(solver, pattern)
    solver.add(checksum_matches(codes))

    passwords = []
    while config.max_solutions is None or len(passwords) < config.max_solutions:
        solver_status = solver.check()
        if solver_status != z3.sat:
            break

        model = solver.model()
        sol = [model.eval(code, model_completion=True).as_long() for code in codes]
        passwords.append(Password(tuple(PasswordChar(code) for code in sol)))

        # 見つかった解を除外する。未知数がなければ解は高々 1 個。
        if not unknowns:
            break
        solver.add(z3.Or([
            unknown != sol[i] for i, unknown in unknowns
        ]))

    info(f"solutions: {len(passwords)}")

    return Solution(passwords=sorted(passwords))

# パターン文字列をパースする。各要素は PasswordChar または WILDCARD。
def parse_pattern(s):
    if not (Password.MIN_LEN <= len(s) <= Password.MAX_LEN):
        raise InvalidLength()

    pattern = []
    for i, c in enumerate(s):
        if c == WILDCARD:
            pattern.append(WILDCARD)
            continue
        pc = PasswordChar.from_char(c)
        if pc is None:
            raise InvalidSymbol(i, c)
        pattern.append(pc)

    return pattern

# パスワードの内部値を表す値の列を作る。
#
# 確定文字は定数、ワイルドカードは 0..=0x3F に制約された変数となる。
# 戻り値は (値の列, [(位置, 変数)])。
def make_codes(solver, pattern):
    codes = []
    unknowns = []

    for i, pc in enumerate(pattern):
        if pc == WILDCARD:
            code = z3.BitVec(f"code{i}", 8)
            solver.add(bitvec_minmax(code, 0, 0x3F))
            unknowns.append((i, code))
        else:
            code = z3.BitVecVal(int(pc), 8)
        codes.append(code)

    return codes, unknowns

# パスワードの内部値列に対し、チェックサムが一致するという制約を返す。
def checksum_matches(codes):
    buf = decode_codes(codes)

    embed = embedded_checksum(buf)
    calc = calc_checksum(buf[CHECKSUM_LEN:])

    return z3.And(
        as_bool(embed.sum_add == calc.sum_add),
        as_bool(embed.sum_xor == calc.sum_xor),
    )
