# Action interface for the configuration parser.
#
# The parser calls one method per parsed unit and continues only while the
# methods return True.  Actions accepts and ignores everything, so a consumer
# overrides just the events it cares about.

import collections
import logging


class Actions:
    def on_device(self, name):
        return True

    def on_comment(self, text):
        return True

    def on_sysconfig(self, name, value):
        return True

    def on_tile(self, name):
        return True

    def on_arc(self, sink, source):
        return True

    def on_word(self, name, value):
        return True

    def on_enum(self, name, value):
        return True

    def on_unknown(self, value):
        return True

    def on_bram(self, index):
        return True

    def on_data(self, index, position, value):
        return True

    def on_commit(self):
        return True


# Gathers an overview of a configuration: the device, the tiles in order of
# declaration, which of them carry any records, and how many records of each
# kind were seen.
class Summary(Actions):
    def __init__(self):
        self.device = None
        self.comments = []
        self.sysconfig = {}
        self.tiles = []
        self.configured = set()
        self.brams = []
        self.counts = collections.Counter()
        # Tiles sharing the body currently being read
        self.open_tiles = []

    def count(self, kind, *args):
        logging.debug('%s %s', kind, ' '.join(str(arg) for arg in args))
        self.counts[kind] += 1
        return True

    def record(self, kind, *args):
        self.configured.update(self.open_tiles)
        return self.count(kind, *args)

    def on_device(self, name):
        self.device = name
        return self.count('device', name)

    def on_comment(self, text):
        self.comments.append(text)
        return self.count('comment', text)

    def on_sysconfig(self, name, value):
        self.sysconfig[name] = value
        return self.count('sysconfig', name, value)

    def on_tile(self, name):
        self.tiles.append(name)
        self.open_tiles.append(name)
        return self.count('tile', name)

    def on_arc(self, sink, source):
        return self.record('arc', sink, source)

    def on_word(self, name, value):
        return self.record('word', name, value)

    def on_enum(self, name, value):
        return self.record('enum', name, value)

    def on_unknown(self, value):
        return self.record('unknown', value)

    def on_bram(self, index):
        self.brams.append(index)
        return self.count('bram', index)

    # Too many of these to log
    def on_data(self, index, position, value):
        self.counts['data'] += 1
        return True

    def on_commit(self):
        self.open_tiles = []
        return self.count('commit')

    def lines(self):
        yield 'device %s' % self.device
        for text in self.comments:
            yield 'comment %s' % text
        for name in sorted(self.sysconfig):
            yield 'sysconfig %s = %s' % (name, self.sysconfig[name])
        for kind in ['tile', 'arc', 'word', 'enum', 'unknown', 'bram', 'data']:
            yield '%-9s %d' % (kind, self.counts[kind])
