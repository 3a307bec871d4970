# ゲーム状態をシリアライズしたバイト列関連。

from dataclasses import dataclass

from bits import BitReader, BitWriter
from checksum import CHECKSUM_LEN, calc_checksum, checksum_is_ok, embedded_checksum
from password import InvalidLength, Password, code_to_symbol
from savedata import (
    INVENTORY_CAPACITY,
    Bookmarks,
    Equipment,
    Events,
    Minions,
    RawSavedata,
    Spells,
    Treasures,
)

# パスワードのエンコード時に用いる加算値テーブル。
ENCODE_ADD_TABLE = (0x05, 0x19, 0x32, 0x21)

# パスワード先頭文字に XOR される値。
ENCODE_XOR_HEAD = 0x1F

# ゲーム状態のビット配置 (インベントリを除く)。上位ビットから順に (名前, ビット数)。
#
# 16bit 値は上位/下位バイトに分割されて格納される。
# ひえんブックマークも上位 2bit/下位 8bit に分割されて格納される。
SAVEDATA_LAYOUT = (
    ("age_timer_hi", 8),
    ("purse_hi", 8),
    ("age", 8),
    ("purse_lo", 8),
    ("xp_lo", 8),
    ("deposit", 6),
    ("xp_hi", 8),
    ("spells", 8),
    ("treasures", 5),
    ("respawn", 4),
    ("bookmarks_hi", 2),
    ("minions", 3),
    ("bookmarks_lo", 8),
    ("events", 8),
    ("helm", 2),
    ("weapon", 4),
    ("armor", 4),
    ("shoes", 3),
    ("accessory0", 2),
    ("accessory1", 2),
    ("accessory2", 1),
    ("accessory3", 1),
)

# インベントリ内アイテム 1 個あたりのビット数。
ITEM_BITS = 6

# パスワードの内部値列をデコードし、6bit バイト列を得る。
#
# 引数は int と z3 の BitVec (8bit) のどちらでもよい。演算は mod 256 で行い、最終結果を 6bit に切り詰める。
def decode_codes(codes):
    buf = list(codes)

    # デコード: XOR
    for i in reversed(range(1, len(buf))):
        buf[i] ^= buf[i - 1]
    buf[0] ^= ENCODE_XOR_HEAD

    # デコード: mod 64 減算
    return [(b - ENCODE_ADD_TABLE[i % 4]) & 0x3F for i, b in enumerate(buf)]

# 6bit バイト列をエンコードし、パスワードの内部値列を得る。decode_codes() の逆変換。
def encode_bytes(buf):
    # エンコード: mod 64 加算
    codes = [(b + ENCODE_ADD_TABLE[i % 4]) & 0x3F for i, b in enumerate(buf)]

    # エンコード: XOR
    codes[0] ^= ENCODE_XOR_HEAD
    for i in range(1, len(codes)):
        codes[i] ^= codes[i - 1]

    return codes

# ゲーム状態をシリアライズしたバイト列。
#
# 各要素は 6bit 値。先頭 2 バイトはチェックサム格納領域。
# パスワードをデコードして得られたバイト列のバイト数は元のパスワードの文字数に等しい。
@dataclass(frozen=True)
class SerializedBytes:
    inner: tuple

    def __post_init__(self):
        if not (Password.MIN_LEN <= len(self.inner) <= Password.MAX_LEN):
            raise InvalidLength(
                f"serialized bytes must contain {Password.MIN_LEN}..={Password.MAX_LEN} bytes"
            )
        assert all(isinstance(b, int) and 0 <= b <= 0x3F for b in self.inner)

    def __len__(self):
        return len(self.inner)

    def __iter__(self):
        return iter(self.inner)

    def __getitem__(self, i):
        return self.inner[i]

    # パスワードをデコードして SerializedBytes を得る。特殊パスワードでも構わずデコードする。
    #
    # 戻り値はチェックサムが一致していない可能性がある。
    @classmethod
    def from_password(cls, password):
        return cls(tuple(decode_codes(password.codes())))

    # SerializedBytes をパスワードにエンコードする。
    def to_password(self):
        return Password(tuple(code_to_symbol(code) for code in encode_bytes(self.inner)))

    # ゲーム状態をシリアライズして SerializedBytes を得る。
    #
    # 生/正規化済みのどちらでもよい。戻り値はチェックサムが一致していることが保証される。
    @classmethod
    def from_savedata(cls, savedata):
        bits = BitWriter()

        values = savedata_fields(savedata)
        for name, width in SAVEDATA_LAYOUT:
            bits.push_bits(width, values[name])

        for item in savedata.inventory:
            bits.push_bits(ITEM_BITS, item)
        if not savedata.inventory_is_full():
            bits.push_bits(ITEM_BITS, 0)

        return pack(bits.to_bytes())

    # SerializedBytes をゲーム状態にデシリアライズする。チェックサムが一致していなければ None を返す。
    #
    # ビット数が不足する場合、足りないビットは全て 1 として扱われる。
    def to_savedata(self):
        if not self.checksum_is_ok():
            return None

        bits = BitReader(unpack(self))

        values = {}
        for name, width in SAVEDATA_LAYOUT:
            values[name] = bits.read_bits(width)

        inventory = []
        for _ in range(INVENTORY_CAPACITY):
            item = bits.read_bits(ITEM_BITS)
            if item == 0:
                break
            inventory.append(item)

        return build_savedata(values, tuple(inventory))

    # バイト列に格納されたチェックサムを返す。
    def checksum_embed(self):
        return embedded_checksum(self.inner)

    # バイト列の内容から計算されたチェックサムを返す。
    def checksum_calculated(self):
        return calc_checksum(self.inner[CHECKSUM_LEN:])

    # バイト列に格納されたチェックサムと計算されたチェックサムが一致するかどうかを返す。
    def checksum_is_ok(self):
        return checksum_is_ok(self.inner)

# チェックサムを除いたバイト列の先頭にチェックサムを付加し、SerializedBytes を得る。
def pack(payload):
    payload = tuple(payload)
    checksum = calc_checksum(payload)

    return SerializedBytes((checksum.sum_add, checksum.sum_xor) + payload)

# SerializedBytes からチェックサムを除いたバイト列を返す。チェックサムの検証は行わない。
def unpack(buf):
    return tuple(buf.inner[CHECKSUM_LEN:])

def verify_checksum(buf):
    return buf.checksum_is_ok()

# ゲーム状態をビット配置内の名前と値の対応に変換する。
def savedata_fields(savedata):
    eq = savedata.equipment

    return {
        "age_timer_hi": savedata.age_timer_hi,
        "purse_hi": savedata.purse >> 8,
        "age": savedata.age,
        "purse_lo": savedata.purse & 0xFF,
        "xp_lo": savedata.xp & 0xFF,
        "deposit": savedata.deposit,
        "xp_hi": savedata.xp >> 8,
        "spells": savedata.spells.to_bits(),
        "treasures": savedata.treasures.to_bits(),
        "respawn": savedata.respawn,
        "bookmarks_hi": savedata.bookmarks.to_bits() >> 8,
        "minions": savedata.minions.to_bits(),
        "bookmarks_lo": savedata.bookmarks.to_bits() & 0xFF,
        "events": savedata.events.to_bits(),
        "helm": eq.helm,
        "weapon": eq.weapon,
        "armor": eq.armor,
        "shoes": eq.shoes,
        "accessory0": eq.accessory0,
        "accessory1": eq.accessory1,
        "accessory2": eq.accessory2,
        "accessory3": eq.accessory3,
    }

# ビット配置内の名前と値の対応から生のゲーム状態を作る。
def build_savedata(values, inventory):
    equipment = Equipment(**{name: values[name] for name in Equipment.WIDTHS})

    return RawSavedata(
        xp=values["xp_lo"] | (values["xp_hi"] << 8),
        purse=values["purse_lo"] | (values["purse_hi"] << 8),
        deposit=values["deposit"],
        age=values["age"],
        age_timer_hi=values["age_timer_hi"],
        spells=Spells.from_bits(values["spells"]),
        events=Events.from_bits(values["events"]),
        treasures=Treasures.from_bits(values["treasures"]),
        minions=Minions.from_bits(values["minions"]),
        bookmarks=Bookmarks.from_bits((values["bookmarks_hi"] << 8) | values["bookmarks_lo"]),
        respawn=values["respawn"],
        equipment=equipment,
        inventory=inventory,
    )
