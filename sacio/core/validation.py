"""
checks that a header can be read or written by this library
"""
from sacio.core import sac_h


def check_header(header, allow_xyz=True):
    """
    Check header version and file type.

    :param header: sac_h.SacHeader
    :param allow_xyz: if False, XYZ (grid) files are refused as well
    :raises UnsupportedHeaderVersion: nvhdr is not SAC_HEADER_VERSION
    :raises UnsupportedFileType: iftype is not a known file type, or is
        XYZ and allow_xyz is False. The raw code is kept on the error.
    """
    if header.nvhdr != sac_h.SAC_HEADER_VERSION:
        raise sac_h.UnsupportedHeaderVersion(header.nvhdr)

    iftype = sac_h.file_type(int(header.iftype))
    if isinstance(iftype, sac_h.UnknownFileType):
        raise sac_h.UnsupportedFileType(iftype.code)

    if iftype == sac_h.FileType.XYZ and not allow_xyz:
        raise sac_h.UnsupportedFileType(int(iftype))
