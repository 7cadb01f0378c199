# ubxproto

Tools for working with the u-blox UBX binary protocol spoken by GNSS
receivers:

- a streaming parser that accepts bytes in chunks of any size, finds the
  `0xB5 0x62` sync sequence, checks the 8-bit Fletcher checksum and hands
  back each complete packet;
- growable or fixed-capacity buffers to back the parser, so memory use can be
  capped;
- helpers to build poll request packets and compute UBX checksums;
- the configuration key table (CFG-VAL items) with encoding and decoding of
  key/value pairs.

The package has no runtime dependencies.

## Installation

```
pip install ubxproto
```

## Parsing a byte stream

Feed bytes to `Parser.consume` as they arrive. The returned `ParserIter`
gives back every packet that can be extracted from what has been seen so far;
bytes belonging to an incomplete packet are kept in the parser's buffer and
are picked up by the next call.

A packet that cannot be extracted is reported by raising a `ParserError` from
`next()`. The iterator is still usable afterwards, so read it in a loop that
catches the error and carries on:

```python
from ubxproto.errors import ParserError
from ubxproto.parser import Parser

parser = Parser()  # backed by an unbounded GrowableBuffer

def read_packets(chunk):
    with parser.consume(chunk) as packets:
        while True:
            try:
                packet = next(packets)
            except StopIteration:
                break
            except ParserError as err:
                print("skipped:", err)
                continue
            print(packet.class_id, packet.msg_id, packet.payload.hex())
```

Unread bytes are saved back into the parser's buffer when the iterator is
exhausted, when it is closed (`close()`, or leaving the `with` block), or
when the parser is next used (`consume()`, `is_buffer_empty()`,
`buffer_len()`). The last two report how much data is still waiting for the
rest of a packet.

### Bounded memory

To put a hard limit on memory, back the parser with a `FixedLinearBuffer`:

```python
from ubxproto.buffers import FixedLinearBuffer
from ubxproto.parser import Parser

parser = Parser(FixedLinearBuffer(256))
```

A packet too large for the buffer is reported as an `OutOfMemoryError`
(carrying `required_size`) and skipped; parsing continues with the following
data. A packet whose checksum does not match is reported as an
`InvalidChecksumError` with the `expect`ed and computed (`got`) values, each
as a little-endian 16-bit number. Both are subclasses of `ParserError`, and
errors compare equal when their type and fields match.

Any other storage can be used by subclassing `UnderlyingBuffer` in
`ubxproto.buffers` and implementing `clear`, `__len__`, `__getitem__`,
`max_capacity`, `extend` (returning the number of bytes that did not fit) and
`drain`.

## Building packets

```python
from ubxproto.packets import ChecksumCalc, PacketRequest, ubx_checksum

# Poll a message by class and id: 8 bytes with sync, empty payload and checksum.
request = PacketRequest.request_for_unknown(0x06, 0x01).into_packet_bytes()

# Checksum over class, id, length and payload.
ck_a, ck_b = ubx_checksum(bytes([0x05, 0x01, 0x02, 0x00, 0x06, 0x01]))

# The same, incrementally.
calc = ChecksumCalc()
calc.update(bytes([0x05, 0x01, 0x02, 0x00]))
calc.update(bytes([0x06, 0x01]))
assert calc.result() == (ck_a, ck_b)
```

## Configuration values

`ubxproto.cfg_keys` maps configuration item names to their 32-bit key ids and
back (`key_id_for`, `name_for_key`, `value_type_for`); `CFG_KEYS` is a
read-only mapping of every item name to `(key id, value type)`. Unknown names
or key ids raise `KeyError`.

`ubxproto.cfg_val` decodes and encodes key/value pairs as used by the
CFG-VALSET and CFG-VALGET messages:

```python
from ubxproto.cfg_val import CfgVal, KeyId, StopBits

value = CfgVal.parse(bytes.fromhex("0500521001"))   # Uart1Enabled = True
encoded = value.to_bytes()                            # back to the same 5 bytes
size = len(value)                                     # key plus value size: 5

stop = CfgVal("Uart1StopBits", StopBits.TWO)
out = bytearray()
stop.extend_to(out)                                   # appends the 5 bytes

key = KeyId(0x40520001)
key.value_size()   # StorageSize.FOUR_BYTES
key.group_id()     # 0x52
key.item_id()      # 0x01
```

Values are checked when a `CfgVal` is created: booleans, integers that fit
the item's width, or members of the item's enumeration. The value types are
available as `CfgInfMask`, `DataBits`, `Parity`, `StopBits`,
`AlignmentToReferenceTime`, `TpPulse` and `TpPulseLength`.

## What it does not do

- The parser does not decode message payloads: every packet comes back as an
  `UnknownPacket` holding `class_id`, `msg_id` and the raw `payload` bytes.
- There are no builders for configuration or other command messages beyond
  poll requests.
- It does not open serial ports or talk to a receiver; bytes must be read
  and written by the caller.

## Running the tests

```
pip install "ubxproto[test]"
pytest
```