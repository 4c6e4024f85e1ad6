# Character level input for the Trellis configuration parser.
#
# The configuration grammar never needs more than one character of lookahead,
# so CharStream wraps a text file and supports a single level of undo on the
# characters read from it.  Everything consumed is gone; there is no seeking.
#
# Two kinds of token are extracted:
#
#   read_token()    skips any whitespace, newlines included, and returns the
#                   next run of non-space characters.  Used for verbs, tile
#                   record keywords and block body values.
#   read_field()    a token on the current line, separated from what came
#                   before by at least one space or tab.  Used for the
#                   arguments of a verb or record, which never continue onto
#                   the next line.

EOF = ''

BLANKS = ' \t'
SPACES = ' \t\n\r\v\f'


class CharStream:
    def __init__(self, input_file):
        self.__input = input_file
        self.__pending = None
        self.line_no = 1

    def getc(self):
        if self.__pending is None:
            ch = self.__input.read(1)
        else:
            ch = self.__pending
            self.__pending = None
        if ch == '\n':
            self.line_no += 1
        return ch

    def ungetc(self, ch):
        assert self.__pending is None, 'Only one character of lookahead'
        if ch != EOF:
            if ch == '\n':
                self.line_no -= 1
            self.__pending = ch

    def peek(self):
        ch = self.getc()
        self.ungetc(ch)
        return ch

    # Returns the next character which is not white space, without consuming
    # it, or EOF.
    def peek_non_space(self):
        ch = self.getc()
        while ch != EOF and ch in SPACES:
            ch = self.getc()
        self.ungetc(ch)
        return ch

    def skip_line(self):
        ch = self.getc()
        while ch not in (EOF, '\n'):
            ch = self.getc()

    # Consumes spaces and tabs, returns whether there were any.
    def skip_blanks(self):
        seen = False
        ch = self.getc()
        while ch != EOF and ch in BLANKS:
            seen = True
            ch = self.getc()
        self.ungetc(ch)
        return seen

    def read_token(self):
        self.peek_non_space()
        chars = []
        ch = self.getc()
        while ch != EOF and ch not in SPACES:
            chars.append(ch)
            ch = self.getc()
        self.ungetc(ch)
        return ''.join(chars)

    def read_field(self):
        if not self.skip_blanks():
            return None
        ch = self.peek()
        if ch == EOF or ch in SPACES:
            return None
        return self.read_token()

    def read_rest_of_line(self):
        if not self.skip_blanks():
            return None
        chars = []
        ch = self.getc()
        while ch not in (EOF, '\n'):
            chars.append(ch)
            ch = self.getc()
        self.ungetc(ch)
        return ''.join(chars).rstrip('\r') or None
