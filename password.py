# パスワードおよびパスワード文字関連。

from dataclasses import dataclass
from enum import IntEnum

# パスワード文字の一覧。インデックスが内部値となる。
ALPHABET = (
    "あいうえお"
    "かきくけこ"
    "さしすせそ"
    "たちつてと"
    "なにぬねの"
    "はひふへほ"
    "まみむめも"
    "やゆよ"
    "らりるれろ"
    "わ"
    "がぎぐげご"
    "ざじずぜぞ"
    "ばびぶべぼ"
    "ぱぴぷぺぽ"
)
assert len(ALPHABET) == 0x40

# パスワード文字 1 個あたりのビット数。
BITS_PER_CHAR = 6

class PasswordParseError(Exception):
    pass

# パスワード(またはバイト列)の長さが範囲外。
class InvalidLength(PasswordParseError):
    def __init__(self, msg=None):
        if msg is None:
            msg = f"password must contain {Password.MIN_LEN}..={Password.MAX_LEN} chars"
        super().__init__(msg)

# パスワードに無効な文字が含まれている。
class InvalidSymbol(PasswordParseError):
    def __init__(self, pos, ch):
        super().__init__(f"password contains an invalid character {ch!r} at position {pos}")
        self.pos = pos
        self.ch = ch

# パスワード文字の内部値が範囲外。
class InvalidCode(ValueError):
    def __init__(self, code):
        super().__init__(f"invalid password char code: {code!r}")
        self.code = code

# パスワード内の文字。値は内部値 (0..=0x3F)。
class PasswordChar(IntEnum):
    A   = 0x00
    I   = 0x01
    U   = 0x02
    E   = 0x03
    O   = 0x04
    KA  = 0x05
    KI  = 0x06
    KU  = 0x07
    KE  = 0x08
    KO  = 0x09
    SA  = 0x0A
    SHI = 0x0B
    SU  = 0x0C
    SE  = 0x0D
    SO  = 0x0E
    TA  = 0x0F
    CHI = 0x10
    TSU = 0x11
    TE  = 0x12
    TO  = 0x13
    NA  = 0x14
    NI  = 0x15
    NU  = 0x16
    NE  = 0x17
    NO  = 0x18
    HA  = 0x19
    HI  = 0x1A
    FU  = 0x1B
    HE  = 0x1C
    HO  = 0x1D
    MA  = 0x1E
    MI  = 0x1F
    MU  = 0x20
    ME  = 0x21
    MO  = 0x22
    YA  = 0x23
    YU  = 0x24
    YO  = 0x25
    RA  = 0x26
    RI  = 0x27
    RU  = 0x28
    RE  = 0x29
    RO  = 0x2A
    WA  = 0x2B
    GA  = 0x2C
    GI  = 0x2D
    GU  = 0x2E
    GE  = 0x2F
    GO  = 0x30
    ZA  = 0x31
    JI  = 0x32
    ZU  = 0x33
    ZE  = 0x34
    ZO  = 0x35
    BA  = 0x36
    BI  = 0x37
    BU  = 0x38
    BE  = 0x39
    BO  = 0x3A
    PA  = 0x3B
    PI  = 0x3C
    PU  = 0x3D
    PE  = 0x3E
    PO  = 0x3F

    # ひらがな文字を PasswordChar に変換する。無効な文字に対しては None を返す。
    @classmethod
    def from_char(cls, c):
        if len(c) != 1:
            return None
        i = ALPHABET.find(c)
        if i < 0:
            return None
        return cls(i)

    # 内部値から PasswordChar を作る。無効値に対しては None を返す。
    @classmethod
    def from_inner(cls, inner):
        if not (isinstance(inner, int) and 0 <= inner <= 0x3F):
            return None
        return cls(inner)

    # 全ての文字を昇順で返す。
    @classmethod
    def all(cls):
        return tuple(cls)

    # 対応するひらがな文字を返す。
    def to_char(self):
        return ALPHABET[self]

# ひらがな 1 文字をパースする。
def parse_symbol(c) -> PasswordChar:
    pc = PasswordChar.from_char(c)
    if pc is None:
        raise InvalidSymbol(0, c)
    return pc

def symbol_to_code(pc: PasswordChar) -> int:
    return int(pc)

def code_to_symbol(code) -> PasswordChar:
    pc = PasswordChar.from_inner(code)
    if pc is None:
        raise InvalidCode(code)
    return pc

# パスワード。長さ MIN_LEN..=MAX_LEN の PasswordChar 列。
@dataclass(frozen=True, order=True)
class Password:
    chars: tuple

    MIN_LEN = 1
    MAX_LEN = 38

    # display_pretty() における区切りの位置。
    PRETTY_CHUNK_LENS = (5, 7, 5, 7, 7, 7)

    def __post_init__(self):
        assert Password.MIN_LEN <= len(self.chars) <= Password.MAX_LEN
        assert all(isinstance(pc, PasswordChar) for pc in self.chars)

    # PasswordChar の列から Password を作る。文字数が範囲外なら None を返す。
    @classmethod
    def new(cls, chars):
        chars = tuple(chars)
        if not (cls.MIN_LEN <= len(chars) <= cls.MAX_LEN):
            return None
        return cls(chars)

    # ひらがな文字列をパースして Password を作る。
    #
    # 各文字は先頭から順にチェックされ、最初に見つかったエラーが送出される。
    @classmethod
    def parse(cls, s):
        chars = []

        for i, c in enumerate(s):
            pc = PasswordChar.from_char(c)
            if pc is None:
                raise InvalidSymbol(i, c)
            if len(chars) == cls.MAX_LEN:
                raise InvalidLength()
            chars.append(pc)

        if not chars:
            raise InvalidLength()

        return cls(tuple(chars))

    def __len__(self):
        return len(self.chars)

    def __iter__(self):
        return iter(self.chars)

    def __getitem__(self, i):
        return self.chars[i]

    def __str__(self):
        return self.display()

    # 内部値の列を返す。
    def codes(self):
        return tuple(symbol_to_code(pc) for pc in self.chars)

    # ひらがな文字列(空白区切りなし)を返す。
    def display(self):
        return "".join(pc.to_char() for pc in self.chars)

    # ひらがな文字列(空白区切りあり)を返す。
    def display_pretty(self):
        chunks = []
        pos = 0
        for n in Password.PRETTY_CHUNK_LENS:
            chunk = self.chars[pos:pos + n]
            if not chunk:
                break
            chunks.append("".join(pc.to_char() for pc in chunk))
            pos += n
        return " ".join(chunks)

    # 内部値の 16 進ダンプを返す。
    #
    # 結果の文字列は Mesen や FCEUX のメモリエディタにそのまま貼り付け可能。
    def display_hex(self):
        return " ".join(f"{int(pc):02X}" for pc in self.chars)

    # パスワードが有効(ゲーム状態としてロードできる)かどうかを返す。
    def is_valid(self):
        from serialized import SerializedBytes

        return SerializedBytes.from_password(self).checksum_is_ok()

    # パスワードの 2 文字目のみを見たとき、それが有効なパスワードになりえないかどうかを返す。
    #
    # 先頭 2 文字を c0, c1 とおくと、格納されたチェックサムは
    #
    #   sum_add = ((c0 ^ 0x1F) - 0x05) & 0x3F
    #   sum_xor = ((c1 ^ c0) - 0x19) & 0x3F
    #
    # となる。add と xor の偶奇は常に一致するので、両者の偶奇が異なれば無効。
    # bit0 のみに注目すると、c1 が偶数のとき偶奇は必ず異なる。
    @staticmethod
    def is_invalid_second_char(pc_second):
        return int(pc_second) % 2 == 0

    # 特殊パスワード(音楽室/美術室)かどうかを返す。
    def is_special(self):
        return self.is_special_audio() or self.is_special_enemy()

    # 音楽室に入る特殊パスワードかどうかを返す。末尾が削られていてもよい。
    def is_special_audio(self):
        return SPECIAL_AUDIO[:len(self.chars)] == self.chars

    # 美術室に入る特殊パスワードかどうかを返す。末尾が削られていてもよい。
    def is_special_enemy(self):
        return SPECIAL_ENEMY[:len(self.chars)] == self.chars

def _chars(s):
    return tuple(PasswordChar.from_char(c) for c in s)

# 音楽室に入る特殊パスワード(末尾を削っていない完全なもの)。
SPECIAL_AUDIO = _chars("すべてのきよくがききたいな")

# 美術室に入る特殊パスワード(末尾を削っていない完全なもの)。
SPECIAL_ENEMY = _chars("すべてのてきがみたいな")
