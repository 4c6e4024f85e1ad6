import io

from trellis_conf.actions import Actions, Summary
from trellis_conf.parser import Config, read_conf


CONFIG = '''\
.device LFE5U-25F
.comment Part: LFE5U-25F-6BG381C
.sysconfig COMPRESS_CONFIG ON
.sysconfig CONFIG_MODE JTAG
.tile_group R2C2:PLC2 R2C3:PLC2
arc: R2C2_A0 R2C2_H02E0001
word: SLICEA.K0.INIT 1010101010101010
.tile R3C3:PLC2
.tile R4C4:PLC2
unknown: F12B4
enum: SLICEB.MODE RAMW
.bram_init 0
00 01 02
.bram_init 1
ff
'''


def test_default_actions_accept_everything():
    config = Config(Actions())
    assert read_conf(config, io.StringIO(CONFIG))
    assert config.error is None


def test_summary():
    summary = Summary()
    assert read_conf(Config(summary), io.StringIO(CONFIG))
    assert summary.device == 'LFE5U-25F'
    assert summary.comments == ['Part: LFE5U-25F-6BG381C']
    assert summary.sysconfig == {
        'COMPRESS_CONFIG' : 'ON', 'CONFIG_MODE' : 'JTAG' }
    assert summary.tiles == [
        'R2C2:PLC2', 'R2C3:PLC2', 'R3C3:PLC2', 'R4C4:PLC2']
    assert summary.configured == {'R2C2:PLC2', 'R2C3:PLC2', 'R4C4:PLC2'}
    assert summary.brams == [0, 1]
    assert summary.counts['data'] == 4
    assert summary.counts['commit'] == 5
    assert list(summary.lines()) == [
        'device LFE5U-25F',
        'comment Part: LFE5U-25F-6BG381C',
        'sysconfig COMPRESS_CONFIG = ON',
        'sysconfig CONFIG_MODE = JTAG',
        'tile      4',
        'arc       1',
        'word      1',
        'enum      1',
        'unknown   1',
        'bram      2',
        'data      4',
    ]
