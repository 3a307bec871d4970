# パスワードに記録されるゲーム状態関連。

from dataclasses import dataclass, field, fields

# 値が min_..=max_ の範囲内にあるかどうかを返す。
def in_range(x, min_, max_):
    return isinstance(x, int) and min_ <= x <= max_

# フラグ集合の基底クラス。
#
# フィールドの宣言順がビット列の上位ビットからの順序となる。
class Flags:
    # どのフラグも立っていない状態。
    @classmethod
    def none(cls):
        return cls(**{f.name: False for f in fields(cls)})

    # 全てのフラグが立っている状態。
    @classmethod
    def all(cls):
        return cls(**{f.name: True for f in fields(cls)})

    # フラグ数を返す。
    @classmethod
    def width(cls):
        return len(fields(cls))

    # 右詰めされたビット列からフラグ集合を作る。
    @classmethod
    def from_bits(cls, value):
        n = cls.width()
        assert 0 <= value < (1 << n)

        return cls(**{
            f.name: bool((value >> (n - 1 - i)) & 1) for i, f in enumerate(fields(cls))
        })

    # フラグ集合を右詰めされたビット列にする。
    def to_bits(self):
        value = 0
        for f in fields(self):
            value = (value << 1) | int(getattr(self, f.name))
        return value

# 術習得状態。
@dataclass(frozen=True)
class Spells(Flags):
    houhi: bool = False      # ほうひ
    dadadidi: bool = False   # だだぢぢ
    fuyuu: bool = False      # ふゆう
    mankintan: bool = False  # まんきんたん
    hien: bool = False       # ひえん
    inazuma: bool = False    # いなずま
    rokkaku: bool = False    # ろっかく
    kintan: bool = False     # きんたん

# イベント進行状態。
@dataclass(frozen=True)
class Events(Flags):
    hohoemi: bool = False    # 微笑みの村の通行許可を得た
    dragon: bool = False     # 寝太郎の村でリュウのくびかざりを盗まれた
    sarukani: bool = False   # やまんばを倒した
    murata: bool = False     # 寝太郎の村で村田の情報を聞いた
    netaro: bool = False     # 寝太郎を起こした
    urashima: bool = False   # 浦島の村でパールの鬼を倒した
    kintaro: bool = False    # 金太郎の村で金の鬼を倒した
    hanasaka: bool = False   # 花咲かの村で銀の鬼を倒した

# 宝物所持状態。
@dataclass(frozen=True)
class Treasures(Flags):
    swallow: bool = False    # ツバメのこやすがい
    hourai: bool = False     # ホウライのタマ
    hotoke: bool = False     # ホトケのおはち
    fur: bool = False        # キンいろのけがわ
    dragon: bool = False     # リュウのくびかざり

# お供存在状態。
@dataclass(frozen=True)
class Minions(Flags):
    monkey: bool = False     # 猿
    pheasant: bool = False   # キジ
    dog: bool = False        # 犬

# ひえんブックマーク。
#
# 上位 2bit と下位 8bit はビット列内の別々の位置に格納される。
@dataclass(frozen=True)
class Bookmarks(Flags):
    hien: bool = False       # 飛燕の城
    hohoemi: bool = False    # 微笑みの村
    taketori: bool = False   # 竹取の村
    sarukani: bool = False   # 猿蟹の村
    kibou: bool = False      # 希望の都
    netaro: bool = False     # 寝太郎の村
    urashima: bool = False   # 浦島の村
    kintaro: bool = False    # 金太郎の村
    hanasaka: bool = False   # 花咲かの村
    tabidachi: bool = False  # 旅立ちの村

# 装備。各値は装備品リスト内のインデックス。
#
# インデックスの値域はビット数で決まり、正当な範囲を超えうる。
@dataclass(frozen=True)
class Equipment:
    helm: int = 0        # 兜 (2bit)
    weapon: int = 0      # 武器 (4bit)
    armor: int = 0       # 鎧 (4bit)
    shoes: int = 0       # 靴 (3bit)
    accessory0: int = 0  # いでたち0 (2bit)
    accessory1: int = 0  # いでたち1 (2bit)
    accessory2: int = 0  # いでたち2 (1bit)
    accessory3: int = 0  # いでたち3 (1bit)

    # 各フィールドのビット数。
    WIDTHS = {
        "helm": 2,
        "weapon": 4,
        "armor": 4,
        "shoes": 3,
        "accessory0": 2,
        "accessory1": 2,
        "accessory2": 1,
        "accessory3": 1,
    }

    def __post_init__(self):
        for name, width in Equipment.WIDTHS.items():
            assert in_range(getattr(self, name), 0, (1 << width) - 1), name

    # 全てのインデックスが最大値の装備。
    @classmethod
    def maxed(cls):
        return cls(**{name: (1 << width) - 1 for name, width in cls.WIDTHS.items()})

    # このセーブデータ内装備を実際にロードした後の装備を返す。
    #
    # 装備品のインデックスが不正な場合、装備が変化する。
    # 不正なインデックスが別の装備品の欄に化けることがあり、その結果は後続の欄の処理で上書きされうる。
    def normalize(self):
        res = {name: 0 for name in Equipment.WIDTHS}

        if self.helm <= 2:
            res["helm"] = self.helm

        if self.weapon <= 10:
            res["weapon"] = self.weapon
        elif self.weapon >= 13:
            res["armor"] = self.weapon - 12

        if self.armor <= 9:
            res["armor"] = self.armor
        elif self.armor >= 12:
            res["shoes"] = self.armor - 11

        if self.shoes <= 4:
            res["shoes"] = self.shoes
        elif self.shoes == 7:
            res["accessory0"] = 1

        if self.accessory0 <= 2:
            res["accessory0"] = self.accessory0

        if self.accessory1 <= 2:
            res["accessory1"] = self.accessory1

        res["accessory2"] = self.accessory2
        res["accessory3"] = self.accessory3

        return Equipment(**res)

# インベントリの最大アイテム数。
INVENTORY_CAPACITY = 8

# アイテムID の値域 (nonzero, 6bit)。
ITEM_ID_MIN = 1
ITEM_ID_MAX = 0x3F

# 各値のビット数。
XP_BITS = 16
PURSE_BITS = 16
DEPOSIT_BITS = 6
AGE_BITS = 8
AGE_TIMER_HI_BITS = 8
RESPAWN_BITS = 4

# パスワードに記録されるゲーム状態。
#
# 直接インスタンス化せず、RawSavedata か NormalizedSavedata を使う。
@dataclass(frozen=True)
class Savedata:
    # 経験値。
    xp: int = 0
    # 所持金。
    purse: int = 0
    # 預金。
    deposit: int = 0
    # 年齢。
    age: int = 0
    # 加齢タイマー上位バイト。
    age_timer_hi: int = 0
    # 術習得状態。
    spells: Spells = field(default_factory=Spells)
    # イベント進行状態。
    events: Events = field(default_factory=Events)
    # 宝物所持状態。
    treasures: Treasures = field(default_factory=Treasures)
    # お供存在状態。
    minions: Minions = field(default_factory=Minions)
    # ひえんブックマーク。
    bookmarks: Bookmarks = field(default_factory=Bookmarks)
    # 復活地点ID。
    respawn: int = 0
    # 装備。
    equipment: Equipment = field(default_factory=Equipment)
    # インベントリ (アイテムID の列)。
    inventory: tuple = ()

    def __post_init__(self):
        assert in_range(self.xp, 0, (1 << XP_BITS) - 1)
        assert in_range(self.purse, 0, (1 << PURSE_BITS) - 1)
        assert in_range(self.deposit, 0, (1 << DEPOSIT_BITS) - 1)
        assert in_range(self.age, 0, (1 << AGE_BITS) - 1)
        assert in_range(self.age_timer_hi, 0, (1 << AGE_TIMER_HI_BITS) - 1)
        assert in_range(self.respawn, 0, (1 << RESPAWN_BITS) - 1)
        assert isinstance(self.inventory, tuple)
        assert len(self.inventory) <= INVENTORY_CAPACITY
        assert all(in_range(item, ITEM_ID_MIN, ITEM_ID_MAX) for item in self.inventory)

    # インベントリが満杯かどうかを返す。
    def inventory_is_full(self):
        return len(self.inventory) == INVENTORY_CAPACITY

# パスワードをデコードしただけの状態。装備品のインデックスが不正でありうる。
@dataclass(frozen=True)
class RawSavedata(Savedata):
    # このセーブデータを実際にロードした後の状態を返す。
    def normalize(self):
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values["equipment"] = self.equipment.normalize()

        return NormalizedSavedata(**values)

# 実際にロードされた後の状態。
@dataclass(frozen=True)
class NormalizedSavedata(Savedata):
    def normalize(self):
        return self
