#!/usr/bin/env python3
"""Tests for the S-expression lexer."""

import sys
import unittest
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from kiparse.errors import LexError
from kiparse.lexer import Lexer, TokenKind, decode_escapes, tokenize


def kinds(text, keywords=frozenset()):
    return [t.kind for t in tokenize(text, keywords)]


class TestTokenClasses(unittest.TestCase):

    def test_simple_form(self):
        self.assertEqual(kinds('(at 1.5 -2)'), [
            TokenKind.OPEN, TokenKind.IDENT, TokenKind.NUMBER, TokenKind.NUMBER, TokenKind.CLOSE,
        ])

    def test_keywords(self):
        tokens = list(tokenize('(at 1 2)', frozenset({'at'})))
        self.assertEqual(tokens[1].kind, TokenKind.KEYWORD)
        self.assertEqual(tokens[1].value, 'at')

    def test_numbers(self):
        values = [t.value for t in tokenize('+1 .5 -3. 20240108')]
        self.assertEqual(values, [1.0, 0.5, -3.0, 20240108.0])

    def test_number_keeps_lexeme(self):
        token = next(tokenize('0.250'))
        self.assertEqual(token.text, '0.250')
        self.assertEqual(token.value, 0.25)

    def test_identifiers_with_punctuation(self):
        tokens = list(tokenize('F.Cu *.Mask ${REFERENCE} /SIG'))
        self.assertTrue(all(t.kind == TokenKind.IDENT for t in tokens))
        self.assertEqual([t.value for t in tokens], ['F.Cu', '*.Mask', '${REFERENCE}', '/SIG'])

    def test_string_with_spaces_and_parens(self):
        tokens = list(tokenize('(name "a (b) c")'))
        self.assertEqual(tokens[2].kind, TokenKind.STRING)
        self.assertEqual(tokens[2].value, 'a (b) c')
        self.assertEqual(len(tokens), 4)

    def test_string_escapes(self):
        token = next(tokenize(r'"a\"b\\c\nd"'))
        self.assertEqual(token.value, 'a"b\\c\nd')
        self.assertEqual(token.text, r'"a\"b\\c\nd"')

    def test_empty_string(self):
        token = next(tokenize('""'))
        self.assertEqual(token.kind, TokenKind.STRING)
        self.assertEqual(token.value, '')

    def test_comments_and_whitespace_dropped(self):
        self.assertEqual(kinds('# header comment\n(x)\n\t'), [
            TokenKind.OPEN, TokenKind.IDENT, TokenKind.CLOSE,
        ])

    def test_positions(self):
        tokens = list(tokenize('(a\n  b)'))
        self.assertEqual((tokens[0].line, tokens[0].column), (1, 1))
        self.assertEqual((tokens[2].line, tokens[2].column), (2, 3))
        self.assertEqual((tokens[3].line, tokens[3].column), (2, 4))

    def test_positions_after_multiline_string(self):
        tokens = list(tokenize('"one\ntwo" x'))
        self.assertEqual(tokens[0].value, 'one\ntwo')
        self.assertEqual((tokens[1].line, tokens[1].column), (2, 6))


class TestRecovery(unittest.TestCase):

    def test_malformed_number_becomes_identifier(self):
        lexer = Lexer('1.2.3 4k7')
        tokens = list(lexer)
        self.assertEqual([t.kind for t in tokens], [TokenKind.IDENT, TokenKind.IDENT])
        self.assertEqual(tokens[0].value, '1.2.3')
        self.assertEqual(len(lexer.errors), 2)
        self.assertIsInstance(lexer.errors[0], LexError)
        self.assertEqual(lexer.errors[1].column, 7)

    def test_lone_sign_is_identifier(self):
        lexer = Lexer('-')
        self.assertEqual([t.kind for t in lexer], [TokenKind.IDENT])
        self.assertEqual(len(lexer.errors), 1)

    def test_unterminated_string(self):
        lexer = Lexer('(a "abc')
        tokens = list(lexer)
        self.assertEqual(tokens[-1].kind, TokenKind.STRING)
        self.assertEqual(tokens[-1].value, 'abc')
        self.assertEqual(len(lexer.errors), 1)

    def test_unterminated_string_with_trailing_backslash(self):
        lexer = Lexer('"abc\\')
        tokens = list(lexer)
        self.assertEqual(len(tokens), 1)
        self.assertEqual(tokens[0].value, 'abc')
        self.assertEqual(len(lexer.errors), 1)

    def test_out_of_range_number_becomes_identifier(self):
        lexer = Lexer('9' * 400 + ' -' + '9' * 400)
        tokens = list(lexer)
        self.assertEqual([t.kind for t in tokens], [TokenKind.IDENT, TokenKind.IDENT])
        self.assertEqual(tokens[1].value, '-' + '9' * 400)
        self.assertEqual(len(lexer.errors), 2)

    def test_clean_text_has_no_errors(self):
        lexer = Lexer('(kicad_pcb (version 20240108))')
        list(lexer)
        self.assertEqual(lexer.errors, [])


class TestRestartable(unittest.TestCase):

    def test_iterating_twice_yields_same_tokens(self):
        lexer = Lexer('(a "b" 1 (c))')
        self.assertEqual(list(lexer), list(lexer))

    def test_errors_reset_per_scan(self):
        lexer = Lexer('1.2.3')
        list(lexer)
        list(lexer)
        self.assertEqual(len(lexer.errors), 1)

    def test_lazy(self):
        stream = tokenize('(a b c')
        self.assertEqual(next(stream).kind, TokenKind.OPEN)
        self.assertEqual(next(stream).value, 'a')


class TestDecodeEscapes(unittest.TestCase):

    def test_known_and_unknown_escapes(self):
        self.assertEqual(decode_escapes(r'a\tb\rc\qd'), 'a\tb\rcqd')

    def test_no_escapes(self):
        self.assertEqual(decode_escapes('plain'), 'plain')


if __name__ == '__main__':
    unittest.main()
