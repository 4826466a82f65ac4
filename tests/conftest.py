"""
Shared fixtures for the DBC parser tests.

© 2024 Intel Corporation
SPDX-License-Identifier: Apache-2.0 and MIT
"""

import pytest

SAMPLE_DBC = b'''VERSION ""

NS_ :
    NS_DESC_
    CM_
    BA_DEF_

BS_:

BU_: IO DBG ECU

BO_ 500 IO_DEBUG: 4 IO
 SG_ IO_DEBUG_test_unsigned : 0|8@1+ (1,0) [0|0] "" DBG
 SG_ IO_DEBUG_test_signed : 8|8@1- (1,0) [0|0] "" DBG

BO_ 256 ENGINE: 8 ECU
 SG_ ENGINE_speed : 0|16@1+ (0.25,0) [0|16383.75] "rpm" IO,DBG

BO_TX_BU_ 256 : ECU,IO;

CM_ SG_ 500 IO_DEBUG_test_unsigned "Debug counter";
BA_ "GenMsgCycleTime" BO_ 500 100;
VAL_ 500 IO_DEBUG_test_unsigned 0 "off" 1 "on" ;
'''

BROKEN_DBC = b'''BU_: IO DBG

BO_ 500 IO_DEBUG: 4 IO
 SG_ IO_DEBUG_test_unsigned : 0|8@1+ (1,0) [0|0] "" DBG

BO_ 501 IO_BAD: 4x IO
 SG_ IO_BAD_value : 0|8@1+ (1,0) [0|0] "" DBG

BO_ 502 IO_NEXT: 2 IO
 SG_ IO_NEXT_value : 0|8@1+ (1,0) [0|0] "" DBG
'''


@pytest.fixture
def sample_dbc() -> bytes:
    return SAMPLE_DBC


@pytest.fixture
def broken_dbc() -> bytes:
    return BROKEN_DBC


@pytest.fixture
def dbc_file(tmp_path, sample_dbc):
    path = tmp_path / "sample.dbc"
    path.write_bytes(sample_dbc)
    return path
