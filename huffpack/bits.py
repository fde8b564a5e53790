class BitPacker:
    def __init__(self):
        self.buffer = 0
        self.bit_count = 0

    def push(self, bit):
        if bit not in (0, 1):
            raise ValueError(f"Got unexpected bit: {bit}")
        out = self.push_code(bit, 1)
        return out[0] if out else None

    def push_code(self, value, length):
        if length < 0 or value >> length:
            raise ValueError(f"Code {value} does not fit in {length} bits")
        self.buffer = (self.buffer << length) | value
        self.bit_count += length
        whole, rest = divmod(self.bit_count, 8)
        if not whole:
            return b""
        out = (self.buffer >> rest).to_bytes(whole, "big")
        self.buffer &= (1 << rest) - 1
        self.bit_count = rest
        return out

    def flush(self):
        # Partial byte is left-aligned; the low bits become zero padding.
        if self.bit_count == 0:
            return None
        out = self.buffer << (8 - self.bit_count)
        self.buffer = 0
        self.bit_count = 0
        return out


def unpack_bits(byte, meaningful=8):
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"Not a byte value: {byte}")
    if not 0 <= meaningful <= 8:
        raise ValueError(f"Meaningful bit count out of range: {meaningful}")
    for i in range(7, 7 - meaningful, -1):
        yield (byte >> i) & 1
