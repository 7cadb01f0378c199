"""Table of configuration item names, their 32-bit key ids and value types.

Value types are named by their wire representation: "bool", "u8", "u16",
"i16", "u32", "u64", or the name of an enumerated type ("CfgInfMask",
"DataBits", "Parity", "StopBits", "AlignmentToReferenceTime", "TpPulse",
"TpPulseLength").
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

_MSGOUT_GROUP = 0x20910000

# The five ports follow each other: I2C, UART1, UART2, USB, SPI.
_PORT_OFFSETS = (("I2c", 0), ("Spi", 4), ("Uart1", 1), ("Uart2", 2), ("Usb", 3))

# Message output rate items, by name prefix and the item id for the I2C port.
_MSGOUT_ITEMS = (
    ("MsgoutNmeaIdDtm", 0x0A6),
    ("MsgoutNmeaIdGbs", 0x0DD),
    ("MsgoutNmeaIdGga", 0x0BA),
    ("MsgoutNmeaIdGll", 0x0C9),
    ("MsgoutNmeaIdGns", 0x0B5),
    ("MsgoutNmeaIdGrs", 0x0CE),
    ("MsgoutNmeaIdGsa", 0x0BF),
    ("MsgoutNmeaIdGst", 0x0D3),
    ("MsgoutNmeaIdGsv", 0x0C4),
    ("MsgoutNmeaIdRmc", 0x0AB),
    ("MsgoutNmeaIdVlw", 0x0E7),
    ("MsgoutNmeaIdVtg", 0x0B0),
    ("MsgoutNmeaIdZda", 0x0D8),
    ("MsgoutPubxIdPolyp", 0x0EC),
    ("MsgoutPubxIdPolys", 0x0F1),
    ("MsgoutPubxIdPolyt", 0x0F6),
    ("MsgoutRtcm3xType1005", 0x2BD),
    ("MsgoutRtcm3xType1074", 0x35E),
    ("MsgoutRtcm3xType1077", 0x2CC),
    ("MsgoutRtcm3xType1084", 0x363),
    ("MsgoutRtcm3xType1087", 0x2D1),
    ("MsgoutRtcm3xType1094", 0x368),
    ("MsgoutRtcm3xType1097", 0x318),
    ("MsgoutRtcm3xType1124", 0x36D),
    ("MsgoutRtcm3xType1127", 0x2D6),
    ("MsgoutRtcm3xType1230", 0x303),
    ("MsgoutUbxLogInfo", 0x259),
    ("MsgoutUbxMonComms", 0x34F),
    ("MsgoutUbxMonHw2", 0x1B9),
    ("MsgoutUbxMonHw3", 0x354),
    ("MsgoutUbxMonHw", 0x1B4),
    ("MsgoutUbxMonIo", 0x1A5),
    ("MsgoutUbxMonMsgPp", 0x196),
    ("MsgoutUbxMonRf", 0x359),
    ("MsgoutUbxMonRxbuf", 0x1A0),
    ("MsgoutUbxMonRxr", 0x187),
    ("MsgoutUbxMonTxbuf", 0x19B),
    ("MsgoutUbxNavClock", 0x065),
    ("MsgoutUbxNavDop", 0x038),
    ("MsgoutUbxNavEoe", 0x15F),
    ("MsgoutUbxNavGeofence", 0x0A1),
    ("MsgoutUbxNavHpPosEcef", 0x02E),
    ("MsgoutUbxNavHpPosllh", 0x033),
    ("MsgoutUbxNavOdo", 0x07E),
    ("MsgoutUbxNavOrb", 0x010),
    ("MsgoutUbxNavPosEcef", 0x024),
    ("MsgoutUbxNavPosLlh", 0x029),
    ("MsgoutUbxNavPvt", 0x006),
    ("MsgoutUbxNavRelposned", 0x08D),
    ("MsgoutUbxNavSat", 0x015),
    ("MsgoutUbxNavSig", 0x345),
    ("MsgoutUbxNavStatus", 0x01A),
    ("MsgoutUbxNavSvin", 0x088),
    ("MsgoutUbxNavTimeBds", 0x051),
    ("MsgoutUbxNavTimeGal", 0x056),
    ("MsgoutUbxNavTimeGlo", 0x04C),
    ("MsgoutUbxNavTimeGps", 0x047),
    ("MsgoutUbxNavTimeLs", 0x060),
    ("MsgoutUbxNavTimeUtc", 0x05B),
    ("MsgoutUbxNavVelEcef", 0x03D),
    ("MsgoutUbxNavVelNed", 0x042),
    ("MsgoutUbxRxmMeasx", 0x204),
    ("MsgoutUbxRxmRawx", 0x2A4),
    ("MsgoutUbxRxmRlm", 0x25E),
    ("MsgoutUbxRxmRtcm", 0x268),
    ("MsgoutUbxRxmSfrbx", 0x231),
    ("MsgoutUbxTimTm2", 0x178),
    ("MsgoutUbxTimTp", 0x17D),
    ("MsgoutUbxTimVrfy", 0x092),
)

_BEFORE_MSGOUT = (
    # CFG-UART1
    ("Uart1Baudrate", 0x40520001, "u32"),
    ("Uart1StopBits", 0x20520002, "StopBits"),
    ("Uart1DataBits", 0x20520003, "DataBits"),
    ("Uart1Parity", 0x20520004, "Parity"),
    ("Uart1Enabled", 0x10520005, "bool"),
    # CFG-UART1INPROT
    ("Uart1InProtUbx", 0x10730001, "bool"),
    ("Uart1InProtNmea", 0x10730002, "bool"),
    ("Uart1InProtRtcm3x", 0x10730004, "bool"),
    # CFG-UART1OUTPROT
    ("Uart1OutProtUbx", 0x10740001, "bool"),
    ("Uart1OutProtNmea", 0x10740002, "bool"),
    ("Uart1OutProtRtcm3x", 0x10740004, "bool"),
    # CFG-UART2
    ("Uart2Baudrate", 0x40530001, "u32"),
    ("Uart2StopBits", 0x20530002, "StopBits"),
    ("Uart2DataBits", 0x20530003, "DataBits"),
    ("Uart2Parity", 0x20530004, "Parity"),
    ("Uart2Enabled", 0x10530005, "bool"),
    ("Uart2Remap", 0x10530006, "bool"),
    # CFG-UART2INPROT
    ("Uart2InProtUbx", 0x10750001, "bool"),
    ("Uart2InProtNmea", 0x10750002, "bool"),
    ("Uart2InProtRtcm3x", 0x10750004, "bool"),
    # CFG-UART2OUTPROT
    ("Uart2OutProtUbx", 0x10760001, "bool"),
    ("Uart2OutProtNmea", 0x10760002, "bool"),
    ("Uart2OutProtRtcm3x", 0x10760004, "bool"),
    # CFG-USB
    ("UsbEnabled", 0x10650001, "bool"),
    ("UsbSelfpow", 0x10650002, "bool"),
    ("UsbVendorId", 0x3065000A, "u16"),
    ("UsbProductId", 0x3065000B, "u16"),
    ("UsbPower", 0x3065000C, "u16"),
    ("UsbVendorStr0", 0x5065000D, "u64"),
    ("UsbVendorStr1", 0x5065000E, "u64"),
    ("UsbVendorStr2", 0x5065000F, "u64"),
    ("UsbVendorStr3", 0x50650010, "u64"),
    ("UsbProductStr0", 0x50650011, "u64"),
    ("UsbProductStr1", 0x50650012, "u64"),
    ("UsbProductStr2", 0x50650013, "u64"),
    ("UsbProductStr3", 0x50650014, "u64"),
    ("UsbSerialNoStr0", 0x50650015, "u64"),
    ("UsbSerialNoStr1", 0x50650016, "u64"),
    ("UsbSerialNoStr2", 0x50650017, "u64"),
    ("UsbSerialNoStr3", 0x50650018, "u64"),
    # CFG-USBINPROT
    ("UsbinprotUbx", 0x10770001, "bool"),
    ("UsbinprotNmea", 0x10770002, "bool"),
    ("UsbinprotRtcm3X", 0x10770004, "bool"),
    # CFG-USBOUTPROT
    ("UsbOutProtUbx", 0x10780001, "bool"),
    ("UsbOutProtNmea", 0x10780002, "bool"),
    ("UsbOutProtRtcm3x", 0x10780004, "bool"),
    # CFG-INFMSG
    ("InfmsgUbxI2c", 0x20920001, "CfgInfMask"),
    ("InfmsgUbxUart1", 0x20920002, "CfgInfMask"),
    ("InfmsgUbxUart2", 0x20920003, "CfgInfMask"),
    ("InfmsgUbxUsb", 0x20920004, "CfgInfMask"),
    ("InfmsgUbxSpi", 0x20920005, "CfgInfMask"),
    ("InfmsgNmeaI2c", 0x20920006, "CfgInfMask"),
    ("InfmsgNmeaUart1", 0x20920007, "CfgInfMask"),
    ("InfmsgNmeaUart2", 0x20920008, "CfgInfMask"),
    ("InfmsgNmeaUsb", 0x20920009, "CfgInfMask"),
    ("InfmsgNmeaSpi", 0x2092000A, "CfgInfMask"),
    # CFG-RATE
    ("RateMeas", 0x30210001, "u16"),
    ("RateNav", 0x30210002, "u16"),
    ("RateTimeref", 0x20210003, "AlignmentToReferenceTime"),
)

_AFTER_MSGOUT = (
    # CFG-SIGNAL
    ("SignalGpsEna", 0x1031001F, "bool"),
    ("SignalGpsL1caEna", 0x10310001, "bool"),
    ("SignalGpsL2cEna", 0x10310003, "bool"),
    ("SignalGalEna", 0x10310021, "bool"),
    ("SignalGalE1Ena", 0x10310007, "bool"),
    ("SignalGalE5bEna", 0x1031000A, "bool"),
    ("SignalBdsEna", 0x10310022, "bool"),
    ("SignalBdsB1Ena", 0x1031000D, "bool"),
    ("SignalBdsB2Ena", 0x1031000E, "bool"),
    ("SignalQzssEna", 0x10310024, "bool"),
    ("SignalQzssL1caEna", 0x10310012, "bool"),
    ("SignalQzssL2cEna", 0x10310015, "bool"),
    ("SignalGloEna", 0x10310025, "bool"),
    ("SignalGloL1Ena", 0x10310018, "bool"),
    ("SignalGLoL2Ena", 0x1031001A, "bool"),
    # CFG-TP
    ("TpPulseDef", 0x20050023, "TpPulse"),
    ("TpPulseLengthDef", 0x20050030, "TpPulseLength"),
    ("TpAntCableDelay", 0x30050001, "i16"),
    ("TpPeriodTp1", 0x40050002, "u32"),
    ("TpPeriodLockTp1", 0x40050003, "u32"),
    ("TpFreqTp1", 0x40050024, "u32"),
    ("TpFreqLockTp1", 0x40050025, "u32"),
    ("TpLenTp1", 0x40050004, "u32"),
    ("TpLenLockTp1", 0x40050005, "u32"),
    ("TpTp1Ena", 0x10050007, "bool"),
    ("TpSyncGnssTp1", 0x10050008, "bool"),
    ("TpUseLockedTp1", 0x10050009, "bool"),
    ("TpAlignToTowTp1", 0x1005000A, "bool"),
    ("TpPolTp1", 0x1005000B, "bool"),
    ("TpTimegridTp1", 0x2005000C, "AlignmentToReferenceTime"),
)


def _msgout_entries():
    for prefix, i2c_item in _MSGOUT_ITEMS:
        for port, offset in _PORT_OFFSETS:
            yield prefix + port, _MSGOUT_GROUP + i2c_item + offset, "u8"


def _build() -> tuple[dict[str, tuple[int, str]], dict[int, str]]:
    by_name: dict[str, tuple[int, str]] = {}
    by_key: dict[int, str] = {}
    for entries in (_BEFORE_MSGOUT, tuple(_msgout_entries()), _AFTER_MSGOUT):
        for name, key_id, value_type in entries:
            if name in by_name:
                raise ValueError(f"duplicate configuration item name {name!r}")
            if key_id in by_key:
                raise ValueError(f"duplicate configuration key id 0x{key_id:08X}")
            by_name[name] = (key_id, value_type)
            by_key[key_id] = name
    return by_name, by_key


_BY_NAME, _BY_KEY = _build()

CFG_KEYS: Mapping[str, tuple[int, str]] = MappingProxyType(_BY_NAME)
"""Every configuration item: name -> (key id, value type), in table order."""


def key_id_for(name: str) -> int:
    """Return the key id of the named configuration item."""
    try:
        return _BY_NAME[name][0]
    except KeyError:
        raise KeyError(f"unknown configuration item: {name!r}") from None


def name_for_key(key_id: int) -> str:
    """Return the name of the configuration item with the given key id."""
    try:
        return _BY_KEY[key_id]
    except KeyError:
        raise KeyError(f"unknown key ID: 0x{key_id:08X}") from None


def value_type_for(name: str) -> str:
    """Return the value type name of the named configuration item."""
    try:
        return _BY_NAME[name][1]
    except KeyError:
        raise KeyError(f"unknown configuration item: {name!r}") from None