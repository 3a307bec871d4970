import itertools

import pytest

from savedata import (
    Bookmarks,
    Equipment,
    Minions,
    NormalizedSavedata,
    RawSavedata,
    Spells,
)

def test_flags_bits():
    assert Spells.none().to_bits() == 0
    assert Spells.all().to_bits() == 0xFF
    assert Spells.from_bits(0x01) == Spells(kintan=True)
    assert Spells.from_bits(0x80) == Spells(houhi=True)

    assert Minions.width() == 3
    assert Minions.from_bits(0b100) == Minions(monkey=True)

    assert Bookmarks.width() == 10
    assert Bookmarks(hien=True).to_bits() == 0x200
    assert Bookmarks(tabidachi=True).to_bits() == 0x001

def test_equipment_range():
    Equipment.maxed()
    with pytest.raises(AssertionError):
        Equipment(helm=4)
    with pytest.raises(AssertionError):
        Equipment(shoes=8)

def test_savedata_range():
    with pytest.raises(AssertionError):
        RawSavedata(xp=0x10000)
    with pytest.raises(AssertionError):
        RawSavedata(deposit=0x40)
    with pytest.raises(AssertionError):
        RawSavedata(inventory=(0,))
    with pytest.raises(AssertionError):
        RawSavedata(inventory=(1,) * 9)

def test_equipment_normalize_valid():
    equipment = Equipment(helm=2, weapon=10, armor=9, shoes=4, accessory0=2, accessory1=2, accessory2=1, accessory3=1)
    assert equipment.normalize() == equipment

def test_equipment_normalize_dropped():
    equipment = Equipment(helm=3, weapon=11, armor=10, shoes=5, accessory0=3, accessory1=3)
    assert equipment.normalize() == Equipment()

    assert Equipment(weapon=12, armor=11, shoes=6).normalize() == Equipment()

def test_equipment_normalize_shifted():
    # 不正な武器インデックスは鎧に化ける。
    assert Equipment(weapon=13, armor=10).normalize() == Equipment(armor=1)
    assert Equipment(weapon=15, armor=11).normalize() == Equipment(armor=3)
    # 鎧が正当なら鎧の値で上書きされる。
    assert Equipment(weapon=15, armor=5).normalize() == Equipment(armor=5)

    # 不正な鎧インデックスは靴に化ける。
    assert Equipment(armor=12, shoes=5).normalize() == Equipment(shoes=1)
    assert Equipment(armor=15, shoes=6).normalize() == Equipment(shoes=4)
    assert Equipment(armor=15, shoes=2).normalize() == Equipment(shoes=2)

    # 不正な靴インデックス 7 はいでたち0 に化ける。
    assert Equipment(shoes=7, accessory0=3).normalize() == Equipment(accessory0=1)
    assert Equipment(shoes=7, accessory0=2).normalize() == Equipment(accessory0=2)
    assert Equipment(shoes=7, accessory0=0).normalize() == Equipment()

def test_equipment_normalize_idempotent():
    for helm, weapon, armor, shoes, accessory0 in itertools.product(
        range(4), range(16), range(16), range(8), range(4)
    ):
        equipment = Equipment(
            helm=helm,
            weapon=weapon,
            armor=armor,
            shoes=shoes,
            accessory0=accessory0,
            accessory1=3,
            accessory2=1,
        )
        normalized = equipment.normalize()
        assert normalized.normalize() == normalized

def test_savedata_normalize():
    raw = RawSavedata(xp=100, equipment=Equipment(weapon=14, armor=11), inventory=(1, 2))
    normalized = raw.normalize()

    assert isinstance(normalized, NormalizedSavedata)
    assert normalized.equipment == Equipment(armor=2)
    assert normalized.xp == 100
    assert normalized.inventory == (1, 2)

    assert normalized.normalize() == normalized
    assert raw.normalize() == normalized
    # 生の状態と正規化済みの状態は区別される。
    assert RawSavedata() != NormalizedSavedata()
