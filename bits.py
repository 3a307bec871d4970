# ゲーム状態のシリアライズ用ビット列。
#
# ビット列は 6bit バイトの上位ビットから順に格納される。つまり以下のようになる:
#
#   ..012345 ..6789AB ..CDEFGH ...(以下略)

from password import BITS_PER_CHAR

# チェックサムを除いたゲーム状態は最大 159bit。
# 簡単のため、6 の倍数に切り上げて 162bit とする。
CAPACITY = BITS_PER_CHAR * 27

# 固定容量のビット列への書き込み。
class BitWriter:
    def __init__(self):
        self.value = 0
        self.len = 0

    # n 個のビットを末尾に追加する。
    #
    # bits は追加するビットたちを右詰めした値。
    # たとえば [1, 0, 1, 1, 0] を追加するなら 0b10110 を渡す。
    def push_bits(self, n, bits):
        assert 0 <= bits < (1 << n)
        assert self.len + n <= CAPACITY

        self.value = (self.value << n) | bits
        self.len += n

    # 1 個のビットを末尾に追加する。
    def push_bit(self, bit):
        self.push_bits(1, int(bit))

    # 6bit バイト列に変換する。長さが 6 の倍数になるまで 0 を追加する。
    def to_bytes(self):
        n = -(-self.len // BITS_PER_CHAR)
        pad = n * BITS_PER_CHAR - self.len
        value = self.value << pad

        return tuple(
            (value >> (BITS_PER_CHAR * (n - 1 - i))) & 0x3F for i in range(n)
        )

# 固定容量のビット列からの読み出し。
class BitReader:
    # 6bit バイト列からビット列を作る。
    #
    # 意味を持つのは CAPACITY/6 バイトまでなので、それより多くは読まない。
    # 長さ CAPACITY になるまで 1 を追加する。
    def __init__(self, payload):
        payload = payload[:CAPACITY // BITS_PER_CHAR]

        value = 0
        for b in payload:
            value = (value << BITS_PER_CHAR) | b
        pad = CAPACITY - BITS_PER_CHAR * len(payload)
        value = (value << pad) | ((1 << pad) - 1)

        self.value = value
        self.pos = 0

    # 残りのビット数を返す。
    def remaining(self):
        return CAPACITY - self.pos

    # 先頭から n 個のビットを読み出し、右詰めした値を返す。
    def read_bits(self, n):
        assert n <= self.remaining()

        self.pos += n
        return (self.value >> (CAPACITY - self.pos)) & ((1 << n) - 1)
