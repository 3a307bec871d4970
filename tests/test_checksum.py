from checksum import CHECKSUM_MAX, Checksum, calc_checksum, checksum_is_ok, embedded_checksum

def test_calc_checksum():
    assert calc_checksum([]) == Checksum(CHECKSUM_MAX, CHECKSUM_MAX)
    assert calc_checksum([0x01, 0x02, 0x03]) == Checksum(0x06, 0x00)
    # 加算は mod 64。
    assert calc_checksum([0x3F, 0x3F]) == Checksum(0x3E, 0x00)
    assert calc_checksum([0x2A]) == Checksum(0x2A, 0x2A)

def test_embedded_checksum():
    assert embedded_checksum([0x12, 0x34, 0x00]) == Checksum(0x12, 0x34)
    # 1 バイトしかない場合、足りないビットは全て 1。
    assert embedded_checksum([0x12]) == Checksum(0x12, CHECKSUM_MAX)

def test_checksum_is_ok():
    assert checksum_is_ok([0x06, 0x00, 0x01, 0x02, 0x03])
    assert checksum_is_ok([0x3F])
    assert checksum_is_ok([0x3F, 0x3F])

    assert not checksum_is_ok([0x00])
    assert not checksum_is_ok([0x3F, 0x3E])
    assert not checksum_is_ok([0x06, 0x01, 0x01, 0x02, 0x03])
