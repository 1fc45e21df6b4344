#
# A low level SAC library
#
# Header layout, undefined values and enumerated codes for SAC binary
# files, header version 6.
#

import collections
import enum
import math
import string
import sys

import construct
import numpy as np


PROG_VERSION = '2026.292'

# Size in bytes of the binary header, and the header version implemented
HEADER_SIZE = 632
SAC_HEADER_VERSION = 6
# Byte offset of nvhdr, used to guess the byte order of a file
NVHDR_OFFSET = 304

# Undefined values
FUNDEF = -12345.0
IUNDEF = -12345
LUNDEF = 0
SUNDEF = '-12345'

BYTEORDERS = ('little', 'big')

ICONSTANTS = {
    # iftype: type of file
    "IREAL": 0, "ITIME": 1, "IRLIM": 2, "IAMPH": 3, "IXY": 4, "IXYZ": 51,
    # idep: type of dependent variable
    "IUNKN": 5, "IDISP": 6, "IVEL": 7, "IACC": 8, "IVOLTS": 50,
    # iztype: reference time equivalence
    "IB": 9, "IDAY": 10, "IO": 11, "IA": 12,
    "IT0": 13, "IT1": 14, "IT2": 15, "IT3": 16, "IT4": 17,
    "IT5": 18, "IT6": 19, "IT7": 20, "IT8": 21, "IT9": 22,
    # iinst and component orientation codes, undocumented
    "IRADNV": 23, "ITANNV": 24, "IRADEV": 25, "ITANEV": 26, "INORTH": 27,
    "IEAST": 28, "IHORZA": 29, "IDOWN": 30, "IUP": 31, "ILLLBB": 32,
    "IWWSN1": 33, "IWWSN2": 34, "IHGLP": 35, "ISRO": 36,
    # ievtyp: type of event
    "INUCL": 37, "IPREN": 38, "IPOSTN": 39, "IQUAKE": 40, "IPREQ": 41,
    "IPOSTQ": 42, "ICHEM": 43, "IOTHER": 44,
    "IQB": 72, "IQB1": 73, "IQB2": 74, "IQBX": 75, "IQMT": 76, "IEQ": 77,
    "IEQ1": 78, "IEQ2": 79, "IME": 80, "IEX": 81, "INU": 82, "INC": 83,
    "IO_": 84, "IL": 85, "IR": 86, "IT": 87, "IU": 88, "IEQ3": 89,
    "IEQ0": 90, "IEX0": 91, "IQC": 92, "IQB0": 93, "IGEY": 94, "ILIT": 95,
    "IMET": 96, "IODOR": 97, "IOS": 103,
    # iqual: quality of data
    "IGOOD": 45, "IGLCH": 46, "IDROP": 47, "ILOWSN": 48,
    # isynth: synthetic data flag
    "IRLDTA": 49,
    # imagtyp: magnitude type
    "IMB": 52, "IMS": 53, "IML": 54, "IMW": 55, "IMD": 56, "IMX": 57,
    # imagsrc: magnitude source
    "INEIC": 58, "IPDEQ": 59, "IPDEW": 60, "IPDE": 61, "IISC": 62,
    "IREB": 63, "IUSGS": 64, "IBRK": 65, "ICALTECH": 66, "ILLNL": 67,
    "IEVLOC": 68, "IJSOP": 69, "IUSER": 70, "IUNKNOWN": 71}


class SacError(Exception):
    """
    Base class of all errors raised while reading or writing SAC files.
    """


class SacIOError(SacError):
    """
    Raised if a SAC file can't be opened, read or written.
    """


class SacDecodeError(SacError):
    """
    Raised if a buffer is too short to hold a SAC header.
    """


class SacEncodeError(SacError):
    """
    Raised if a header can't be packed into its binary layout.
    """


class UnsupportedHeaderVersion(SacError):
    def __init__(self, version):
        self.version = version
        super(UnsupportedHeaderVersion, self).__init__(
            "Unsupported header version (nvhdr = {0})".format(version))


class UnsupportedFileType(SacError):
    def __init__(self, code):
        self.code = code
        super(UnsupportedFileType, self).__init__(
            "Unsupported file type (iftype = {0})".format(code))


class HeaderError(SacError, KeyError):
    """
    Raised on an attempt to get or set an unknown header variable.
    """

    def __str__(self):
        return str(self.args[0]) if self.args else ''


class FileType(enum.IntEnum):
    TIME = ICONSTANTS['ITIME']
    REAL_IMAG = ICONSTANTS['IRLIM']
    AMP_PHASE = ICONSTANTS['IAMPH']
    XY = ICONSTANTS['IXY']
    XYZ = ICONSTANTS['IXYZ']


class UnknownFileType(collections.namedtuple('UnknownFileType', 'code')):
    """
    An iftype code that is not one of FileType. The raw code is kept so it
    can be reported and written back unchanged.
    """
    __slots__ = ()

    def __int__(self):
        return self.code


def file_type(code):
    '''
       Map a raw iftype code to FileType, or UnknownFileType.
    '''
    try:
        return FileType(code)
    except ValueError:
        return UnknownFileType(code)


def check_byteorder(byteorder):
    if byteorder not in BYTEORDERS:
        raise ValueError(
            "Byte order must be 'little' or 'big', not {0!r}".format(
                byteorder))
    return byteorder


def swap_byteorder(byteorder):
    if check_byteorder(byteorder) == 'little':
        return 'big'
    return 'little'


def kundef(width):
    '''
       Undefined value of a character field width bytes wide.
    '''
    return SUNDEF.encode('ascii').ljust(width, b' ')


KUNDEF = kundef(8)


def pack_string(value, width):
    """
    Pack text into a fixed width character field.

    Values longer than width are truncated, shorter ones are padded on the
    right with spaces. Characters outside of ASCII are written as '?'.
    The undefined value is written as kundef(width).
    """
    if value == SUNDEF:
        return kundef(width)

    raw = value.encode('ascii', 'replace')[:width]
    return raw.ljust(width, b' ')


def unpack_string(raw):
    """
    Unpack a fixed width character field.

    Surrounding white space (and NUL padding written by some tools) is
    removed. Bytes that are not valid text give the undefined value.
    """
    try:
        text = raw.decode('utf-8')
    except UnicodeDecodeError:
        return SUNDEF

    return text.strip(string.whitespace + '\x00')


# SAC binary header. All numeric fields share the byte order.


def bin_header(byteorder=sys.byteorder):
    if check_byteorder(byteorder) == 'little':
        Flt, Int = construct.Float32l, construct.Int32sl
    else:
        Flt, Int = construct.Float32b, construct.Int32sb

    BIN = construct.Struct(
        # Float part
        # Increment between evenly spaced samples (nominal value).
        "delta" / Flt,
        # Minimum, maximum value of dependent variable.
        "depmin" / Flt,
        "depmax" / Flt,
        # Multiplying scale factor for dependent variable.
        "scale" / Flt,
        # Observed increment if different from nominal value.
        "odelta" / Flt,
        # Beginning, ending value of the independent variable.
        "b" / Flt,
        "e" / Flt,
        # Event origin time, first arrival time (seconds relative to
        # reference time).
        "o" / Flt,
        "a" / Flt,
        "internal1" / Flt,
        # User defined time picks.
        "t" / construct.Array(10, Flt),
        # End of event time.
        "f" / Flt,
        # Instrument response parameters.
        "resp" / construct.Array(10, Flt),
        # Station latitude, longitude, elevation (m), depth (m).
        "stla" / Flt,
        "stlo" / Flt,
        "stel" / Flt,
        "stdp" / Flt,
        # Event latitude, longitude, elevation (m), depth.
        "evla" / Flt,
        "evlo" / Flt,
        "evel" / Flt,
        "evdp" / Flt,
        # Event magnitude.
        "mag" / Flt,
        # User defined variable storage area.
        "user" / construct.Array(10, Flt),
        # Station to event distance (km), event to station azimuth,
        # station to event azimuth, great circle arc (degrees).
        "dist" / Flt,
        "az" / Flt,
        "baz" / Flt,
        "gcarc" / Flt,
        "internal2" / Flt,
        "internal3" / Flt,
        # Mean value of dependent variable.
        "depmen" / Flt,
        # Component azimuth (clockwise from north), incident angle (from
        # vertical).
        "cmpaz" / Flt,
        "cmpinc" / Flt,
        # Spectral/XYZ grid extents.
        "xminimum" / Flt,
        "xmaximum" / Flt,
        "yminimum" / Flt,
        "ymaximum" / Flt,
        "unused0" / construct.Array(7, Flt),
        # Integer part
        # GMT year, julian day, hour, minute, second, millisecond of
        # reference (zero) time.
        "nzyear" / Int,
        "nzjday" / Int,
        "nzhour" / Int,
        "nzmin" / Int,
        "nzsec" / Int,
        "nzmsec" / Int,
        # Header version number.
        "nvhdr" / Int,
        # Origin ID, event ID (CSS 3.0).
        "norid" / Int,
        "nevid" / Int,
        # Number of points per data component.
        "npts" / Int,
        "internal4" / Int,
        # Waveform ID (CSS 3.0).
        "nwfid" / Int,
        # Grid size of an XYZ file.
        "nxsize" / Int,
        "nysize" / Int,
        "unused1" / Int,
        # Enumerated part
        # Type of file: ITIME, IRLIM, IAMPH, IXY, IXYZ.
        "iftype" / Int,
        # Type of dependent variable: IUNKN, IDISP, IVEL, IVOLTS, IACC.
        "idep" / Int,
        # Reference time equivalence: IUNKN, IB, IDAY, IO, IA, ITn.
        "iztype" / Int,
        "unused2" / Int,
        # Type of recording instrument.
        "iinst" / Int,
        # Station, event geographic region.
        "istreg" / Int,
        "ievreg" / Int,
        # Type of event.
        "ievtyp" / Int,
        # Quality of data.
        "iqual" / Int,
        # Synthetic data flag.
        "isynth" / Int,
        # Magnitude type and source.
        "imagtyp" / Int,
        "imagsrc" / Int,
        "unused3" / construct.Array(8, Int),
        # Logical part
        # TRUE if data is evenly spaced.
        "leven" / Int,
        # TRUE if station components have a positive polarity.
        "lpspol" / Int,
        # TRUE if it is okay to overwrite this file on disk.
        "lovrok" / Int,
        # TRUE if dist, az, baz and gcarc are to be calculated from
        # station and event coordinates.
        "lcalda" / Int,
        "unused4" / Int,
        # Character part
        # Station name.
        "kstnm" / construct.Bytes(8),
        # Event name.
        "kevnm" / construct.Bytes(16),
        # Hole identification if nuclear event.
        "khole" / construct.Bytes(8),
        # Event origin, first arrival time identification.
        "ko" / construct.Bytes(8),
        "ka" / construct.Bytes(8),
        # User defined time pick identifications.
        "kt" / construct.Array(10, construct.Bytes(8)),
        # Fini identification.
        "kf" / construct.Bytes(8),
        # User defined variable storage area.
        "kuser0" / construct.Bytes(8),
        "kuser1" / construct.Bytes(8),
        "kuser2" / construct.Bytes(8),
        # Component name.
        "kcmpnm" / construct.Bytes(8),
        # Name of seismic network.
        "knetwk" / construct.Bytes(8),
        # Date data was read onto computer.
        "kdatrd" / construct.Bytes(8),
        # Generic name of recording instrument.
        "kinst" / construct.Bytes(8))

    return BIN


def header_version(buf, byteorder=sys.byteorder):
    '''
       Read nvhdr from a raw header without decoding the rest.
    '''
    if check_byteorder(byteorder) == 'little':
        Int = construct.Int32sl
    else:
        Int = construct.Int32sb

    return Int.parse(buf[NVHDR_OFFSET:NVHDR_OFFSET + 4])


# Header variables, in the order they are stored
FLOAT_KEYS = ("delta", "depmin", "depmax", "scale", "odelta", "b", "e", "o",
              "a", "t", "f", "resp",
              "stla", "stlo", "stel", "stdp", "evla", "evlo", "evel", "evdp",
              "mag", "user",
              "dist", "az", "baz", "gcarc", "depmen", "cmpaz", "cmpinc",
              "xminimum", "xmaximum", "yminimum", "ymaximum")
FLOAT_ARRAY_KEYS = ("t", "resp", "user")
INT_KEYS = ("nzyear", "nzjday", "nzhour", "nzmin", "nzsec", "nzmsec",
            "nvhdr", "norid", "nevid", "npts", "nwfid", "nxsize", "nysize")
ENUM_KEYS = ("iftype", "idep", "iztype", "iinst", "istreg", "ievreg",
             "ievtyp", "iqual", "isynth", "imagtyp", "imagsrc")
LOGICAL_KEYS = ("leven", "lpspol", "lovrok", "lcalda")
CHAR_KEYS = ("kstnm", "kevnm", "khole", "ko", "ka", "kt", "kf",
             "kuser0", "kuser1", "kuser2", "kcmpnm", "knetwk", "kdatrd",
             "kinst")
CHAR_WIDTH = dict((k, 8) for k in CHAR_KEYS)
CHAR_WIDTH["kevnm"] = 16
ARRAY_LENGTH = 10

# Slots that are part of the layout but not exposed
UNDEFINED_SLOTS = {"internal1": FUNDEF, "internal2": FUNDEF,
                   "internal3": FUNDEF, "unused0": [FUNDEF] * 7,
                   "internal4": IUNDEF, "unused1": IUNDEF,
                   "unused2": IUNDEF, "unused3": [IUNDEF] * 8,
                   "unused4": LUNDEF}


class SacHeader(object):
    """
    In memory SAC header.

    Every variable is an attribute. Assigned values are coerced to the
    variable's type: floats, ints, bools, str, lists of 10 for t, resp,
    user and kt, and FileType/UnknownFileType for iftype. Assigning a name
    that is not a header variable raises HeaderError.

    A new header has every variable undefined except nvhdr, which is the
    implemented version, and npts, which is 0.
    """
    __keys__ = FLOAT_KEYS + INT_KEYS + ENUM_KEYS + LOGICAL_KEYS + CHAR_KEYS

    def __init__(self):
        for k in FLOAT_KEYS:
            if k in FLOAT_ARRAY_KEYS:
                self.__dict__[k] = [FUNDEF] * ARRAY_LENGTH
            else:
                self.__dict__[k] = FUNDEF
        for k in INT_KEYS + ENUM_KEYS:
            self.__dict__[k] = IUNDEF
        for k in LOGICAL_KEYS:
            self.__dict__[k] = bool(LUNDEF)
        for k in CHAR_KEYS:
            self.__dict__[k] = SUNDEF
        self.__dict__["kt"] = [SUNDEF] * ARRAY_LENGTH

        self.__dict__["iftype"] = file_type(IUNDEF)
        self.__dict__["nvhdr"] = SAC_HEADER_VERSION
        self.__dict__["npts"] = 0

    def __setattr__(self, name, value):
        if name not in SacHeader.__keys__:
            raise HeaderError(
                "Attempt to set unknown variable {0} in SAC header".format(
                    name))
        self.__dict__[name] = coerce(name, value)

    def __eq__(self, other):
        if not isinstance(other, SacHeader):
            return NotImplemented
        return self.get() == other.get()

    def __ne__(self, other):
        ret = self.__eq__(other)
        if ret is NotImplemented:
            return ret
        return not ret

    def keys(self):
        return list(SacHeader.__keys__)

    def get(self):
        '''
           Return all header variables as a dictionary, in layout order.
        '''
        ret = collections.OrderedDict()
        for k in SacHeader.__keys__:
            value = self.__dict__[k]
            if isinstance(value, list):
                value = list(value)
            ret[k] = value

        return ret

    def set(self, keyval):
        '''
           Set several header variables at once. Nothing is changed if any
           of the names is unknown or any value can't be coerced.
        '''
        unknown = [k for k in keyval.keys() if k not in SacHeader.__keys__]
        if unknown:
            raise HeaderError(
                "Attempt to set unknown variable {0} in SAC header".format(
                    ", ".join(sorted(unknown))))

        values = dict((k, coerce(k, v)) for k, v in keyval.items())
        self.__dict__.update(values)

    def build(self, byteorder=sys.byteorder):
        """
        Pack the header into its binary form.

        :param byteorder: 'little' or 'big'
        :returns: HEADER_SIZE bytes
        :raises SacEncodeError: if a value does not fit its field
        """
        values = dict(UNDEFINED_SLOTS)
        h = self.__dict__
        for k in FLOAT_KEYS + INT_KEYS:
            values[k] = h[k]
        for k in ENUM_KEYS:
            values[k] = int(h[k])
        for k in LOGICAL_KEYS:
            values[k] = 1 if h[k] else 0
        for k in CHAR_KEYS:
            if k == "kt":
                values[k] = [pack_string(v, CHAR_WIDTH[k]) for v in h[k]]
            else:
                values[k] = pack_string(h[k], CHAR_WIDTH[k])

        try:
            buf = bin_header(byteorder).build(values)
        except construct.ConstructError as e:
            raise SacEncodeError(
                "Failed to build SAC header: {0}".format(e)) from e

        if len(buf) != HEADER_SIZE:
            raise SacEncodeError(
                "Built SAC header is {0} bytes, expected {1}".format(
                    len(buf), HEADER_SIZE))

        return buf

    @classmethod
    def parse(cls, buf, byteorder=sys.byteorder):
        """
        Unpack the first HEADER_SIZE bytes of buf.

        Only the structure is checked here, not the values.

        :raises SacDecodeError: if buf is shorter than a header
        """
        if len(buf) < HEADER_SIZE:
            raise SacDecodeError(
                "SAC header needs {0} bytes, got {1}".format(
                    HEADER_SIZE, len(buf)))

        try:
            container = bin_header(byteorder).parse(buf[:HEADER_SIZE])
        except construct.ConstructError as e:
            raise SacDecodeError(
                "Failed to parse SAC header: {0}".format(e)) from e

        keyval = {}
        for k in FLOAT_KEYS + INT_KEYS + ENUM_KEYS:
            keyval[k] = container[k]
        for k in LOGICAL_KEYS:
            keyval[k] = container[k] == 1
        for k in CHAR_KEYS:
            if k == "kt":
                keyval[k] = [unpack_string(v) for v in container[k]]
            else:
                keyval[k] = unpack_string(container[k])

        header = cls()
        header.set(keyval)

        return header


def float32(value):
    '''
       Round value to the nearest float32, the precision of the file.
       Values too large for a float32 are kept as they are, build() reports
       them.
    '''
    value = float(value)
    with np.errstate(over='ignore'):
        ret = float(np.float32(value))
    if math.isinf(ret) and not math.isinf(value):
        return value

    return ret


def coerce(name, value):
    '''
       Convert value to the type stored for header variable name.
    '''
    if name in FLOAT_ARRAY_KEYS:
        value = [float32(v) for v in value]
        if len(value) != ARRAY_LENGTH:
            raise ValueError(
                "{0} must have {1} values, got {2}".format(
                    name, ARRAY_LENGTH, len(value)))
        return value
    if name == "iftype":
        return file_type(int(value))
    if name in FLOAT_KEYS:
        return float32(value)
    if name in INT_KEYS or name in ENUM_KEYS:
        return int(value)
    if name in LOGICAL_KEYS:
        return bool(value)
    if name == "kt":
        if isinstance(value, str):
            raise TypeError("kt must be a sequence of str, not str")
        value = list(value)
        if len(value) > ARRAY_LENGTH:
            raise ValueError(
                "kt holds at most {0} values, got {1}".format(
                    ARRAY_LENGTH, len(value)))
        for v in value:
            if not isinstance(v, str):
                raise TypeError(
                    "kt values must be str, not {0}".format(
                        type(v).__name__))
        # Short lists are filled with undefined picks
        return value + [SUNDEF] * (ARRAY_LENGTH - len(value))
    if name in CHAR_KEYS:
        if not isinstance(value, str):
            raise TypeError(
                "{0} must be str, not {1}".format(
                    name, type(value).__name__))
        return value

    raise HeaderError("Unknown variable {0} in SAC header".format(name))
