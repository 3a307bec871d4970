# FC版 桃太郎伝説 のパスワードをデコード/エンコードする。
#
#   python main.py load 'おにのばか'
#   python main.py save 'ふ'
#   python main.py generate 'おに???'

import argparse
import sys

from password import Password, PasswordParseError
from serialized import SerializedBytes
from solver import SolverConfig, solve
from util import info

# パスワードをロードし、生のセーブデータと実際にロードされるセーブデータを出力する。
def cmd_load(args):
    password = Password.parse(args.password)
    bytes_ = SerializedBytes.from_password(password)

    savedata = bytes_.to_savedata()
    if savedata is None:
        print(
            f"checksum mismatch: embed={bytes_.checksum_embed()}, "
            f"calculated={bytes_.checksum_calculated()}"
        )
        return 1

    print(f"raw: {savedata}")
    print(f"normalized: {savedata.normalize()}")

    return 0

# パスワードをロードした直後の状態をパスワード化する。
def cmd_save(args):
    password = Password.parse(args.password)
    savedata = SerializedBytes.from_password(password).to_savedata()
    if savedata is None:
        print("checksum mismatch")
        return 1

    bytes_ = SerializedBytes.from_savedata(savedata.normalize())
    print(bytes_.to_password().display_pretty())

    return 0

# パターンに合致する有効なパスワードを列挙する。
def cmd_generate(args):
    config = SolverConfig(
        pattern=args.pattern,
        max_solutions=args.max,
    )

    sol = solve(config)
    for password in sol.passwords:
        print(password.display())

    print()
    print(f"count: {sol.count}")

    return 0

def make_parser():
    parser = argparse.ArgumentParser(description="FC版 桃太郎伝説 パスワードツール")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("load", help="パスワードをロードする")
    p.add_argument("password")
    p.set_defaults(func=cmd_load)

    p = sub.add_parser("save", help="ロード直後の状態をパスワード化する")
    p.add_argument("password")
    p.set_defaults(func=cmd_save)

    p = sub.add_parser("generate", help="パターンに合致する有効なパスワードを列挙する")
    p.add_argument("pattern", help="'?' は任意の 1 文字")
    p.add_argument("--max", type=int, default=None, help="列挙する解の上限")
    p.set_defaults(func=cmd_generate)

    return parser

def main(argv=None):
    args = make_parser().parse_args(argv)

    try:
        return args.func(args)
    except PasswordParseError as e:
        info(f"error: {e}")
        return 1

if __name__ == "__main__": sys.exit(main())
