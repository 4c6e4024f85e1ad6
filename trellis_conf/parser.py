# Parser for Trellis textual chip configuration files.
#
# A configuration is a sequence of entries, each introduced by a verb:
#
#   .device NAME
#   .comment TEXT
#   .sysconfig NAME VALUE
#   .tile NAME
#       arc: SINK SOURCE | word: NAME VALUE | enum: NAME VALUE | unknown: VALUE
#   .tile_group NAME NAME ...
#       (tile records as for .tile)
#   .bram_init INDEX
#       HEX HEX ...
#
# Lines starting with # are comments and are skipped.  The bodies of .tile,
# .tile_group and .bram_init have no terminator: a body runs until the next
# non-blank character is . or the input ends.
#
# Nothing is built here.  Each parsed unit is passed to an action object (see
# actions.Actions) as soon as it is read, and a body is closed with on_commit.
# Parsing stops at the first error; events already delivered stand.

import enum
import logging
import re

from .stream import CharStream, EOF


class ErrorKind(enum.Enum):
    SYNTAX = 'syntax'
    IO = 'io'
    ACTION = 'action'


class ConfError(Exception):
    def __init__(self, kind, message, line_no = None,
            token = None, field = None, event = None, cause = None):
        Exception.__init__(self, message)
        self.kind = kind
        self.message = message
        self.line_no = line_no
        self.token = token
        self.field = field
        self.event = event
        self.cause = cause

    def __str__(self):
        if self.line_no is None:
            return self.message
        else:
            return 'Line %d: %s' % (self.line_no, self.message)


# Per-parse context: the action object receiving events and the error from
# the last failed parse.
class Config:
    def __init__(self, action):
        self.action = action
        self.error = None

    # For use by actions: records the reason for rejecting an event.  Returns
    # False so that an action can write  return config.fail('...')
    def fail(self, message, **context):
        self.error = ConfError(ErrorKind.ACTION, message, **context)
        return False


DECIMAL = re.compile(r'[0-9]+$')
HEX = re.compile(r'(0[xX])?[0-9a-fA-F]+$')


class ConfParser:
    def __init__(self, config, stream):
        self.config = config
        self.stream = stream

    def error(self, message, **context):
        raise ConfError(
            ErrorKind.SYNTAX, message, line_no = self.stream.line_no, **context)

    # Delivers one event.  A false return from the action aborts the parse
    # with whatever error the action recorded, or with an anonymous one.
    def emit(self, event, *args):
        # Only a reason recorded by this call applies to it
        self.config.error = None
        if not getattr(self.config.action, event)(*args):
            error = self.config.error
            if error is None:
                error = ConfError(ErrorKind.ACTION, '', event = event)
            if error.line_no is None:
                error.line_no = self.stream.line_no
            if error.event is None:
                error.event = event
            raise error

    def fields(self, names, message):
        values = []
        for name in names:
            value = self.stream.read_field()
            if value is None:
                self.error(message, field = name)
            values.append(value)
        return values


    # Lookahead

    def skip_comments(self):
        la = self.stream.peek_non_space()
        while la == '#':
            self.stream.skip_line()
            la = self.stream.peek_non_space()
        return la

    def at_entry(self):
        return self.skip_comments() != EOF

    def at_record(self):
        return self.skip_comments() not in (EOF, '.')


    # Top level entries

    def read_device(self):
        name, = self.fields(['name'], 'device name required')
        self.emit('on_device', name)

    def read_comment(self):
        text = self.stream.read_rest_of_line()
        if text is None:
            self.error('empty comment', field = 'text')
        self.emit('on_comment', text)

    def read_sysconfig(self):
        name, value = self.fields(
            ['name', 'value'], 'sysconfig requires name and value')
        self.emit('on_sysconfig', name, value)

    def read_tile_name(self):
        name, = self.fields(['name'], 'tile name required')
        self.emit('on_tile', name)

    def read_tile(self):
        self.read_tile_name()
        self.read_tile_conf()

    # All names on the header line share the one body and the one commit.
    def read_tile_group(self):
        self.read_tile_name()
        name = self.stream.read_field()
        while name is not None:
            self.emit('on_tile', name)
            name = self.stream.read_field()
        self.read_tile_conf()

    def read_bram(self):
        index, = self.fields(['index'], 'bram index required')
        if not DECIMAL.match(index):
            self.error('bram index required', field = 'index', token = index)
        index = int(index)
        self.emit('on_bram', index)

        position = 0
        while self.at_record():
            value = self.stream.read_token()
            if not HEX.match(value):
                self.error('hex bram value required', token = value)
            self.emit('on_data', index, position, int(value, 16))
            position += 1
        self.emit('on_commit')


    # Tile records

    def read_arc(self):
        sink, source = self.fields(
            ['sink', 'source'], 'arc requires sink and source')
        self.emit('on_arc', sink, source)

    def read_word(self):
        name, value = self.fields(
            ['name', 'value'], 'word requires name and value')
        self.emit('on_word', name, value)

    def read_enum(self):
        name, value = self.fields(
            ['name', 'value'], 'enum requires name and value')
        self.emit('on_enum', name, value)

    def read_unknown(self):
        value, = self.fields(['value'], 'unknown requires value')
        self.emit('on_unknown', value)

    tile_records = {
        'arc:'      : read_arc,
        'word:'     : read_word,
        'enum:'     : read_enum,
        'unknown:'  : read_unknown,
    }

    def read_tile_conf(self):
        while self.at_record():
            keyword = self.stream.read_token()
            reader = self.tile_records.get(keyword)
            if reader is None:
                self.error(
                    'unknown tile record type \'%s\'' % keyword,
                    token = keyword)
            reader(self)
        self.emit('on_commit')


    verbs = {
        '.device'       : read_device,
        '.comment'      : read_comment,
        '.sysconfig'    : read_sysconfig,
        '.tile'         : read_tile,
        '.tile_group'   : read_tile_group,
        '.bram_init'    : read_bram,
    }

    def read_entries(self):
        while self.at_entry():
            verb = self.stream.read_token()
            reader = self.verbs.get(verb)
            if reader is None:
                self.error('unknown verb \'%s\'' % verb, token = verb)
            reader(self)


# Parses the configuration text read from input_file, delivering events to
# config.action.  Returns True if the whole input was parsed, otherwise False
# with the reason in config.error.
def read_conf(config, input_file):
    stream = CharStream(input_file)
    parser = ConfParser(config, stream)
    config.error = None
    try:
        parser.read_entries()
    except ConfError as error:
        config.error = error
    except OSError as error:
        config.error = ConfError(
            ErrorKind.IO, error.strerror or str(error),
            line_no = stream.line_no, cause = error)
    except UnicodeDecodeError as error:
        config.error = ConfError(
            ErrorKind.IO, str(error), line_no = stream.line_no, cause = error)
    else:
        # An action may have called fail() and still returned True
        config.error = None
        return True

    logging.debug('configuration parse failed: %s', config.error)
    return False


# Parses the named file, raising ConfError on failure.
def parse_file(file_name, action):
    config = Config(action)
    with open(file_name, encoding = 'utf-8') as input_file:
        ok = read_conf(config, input_file)
    if not ok:
        raise config.error
    return action
