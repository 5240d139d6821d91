"""Tests for the source tokenizer."""

from discovery.lexer import (
    CLASS,
    COMMENT,
    DOC_COMMENT,
    NAME,
    NAMESPACE,
    OPEN_TAG,
    STRING,
    VARIABLE,
    WHITESPACE,
    Token,
    is_classified,
    tokenize,
)


def _kinds(source):
    return [token.kind if is_classified(token) else token for token in tokenize(source)]


class TestTokenize:
    """Tests for tokenize()."""

    def test_covers_whole_input(self):
        """Test that joining the token texts gives back the source."""
        source = "<?php\nnamespace A\\B;\n/** doc */\nfinal class C { public $x = 'y'; }\n"
        tokens = tokenize(source)

        text = "".join(token.text if is_classified(token) else token for token in tokens)

        assert text == source

    def test_namespace_declaration(self):
        """Test the tokens of a namespace statement."""
        assert _kinds("namespace App\\Config;") == [NAMESPACE, WHITESPACE, NAME, ";"]

    def test_qualified_name_is_one_token(self):
        """Test that separators inside a name do not split it."""
        tokens = tokenize("\\Vendor\\Package\\Name")

        assert tokens == [Token(NAME, "\\Vendor\\Package\\Name")]

    def test_keywords_case_insensitive(self):
        """Test that keyword matching ignores case."""
        assert _kinds("NameSpace X; CLASS Y") == [
            NAMESPACE, WHITESPACE, NAME, ";", WHITESPACE, CLASS, WHITESPACE, NAME,
        ]

    def test_keyword_prefix_is_a_name(self):
        """Test that identifiers starting with a keyword are plain names."""
        assert tokenize("classes") == [Token(NAME, "classes")]

    def test_comments(self):
        """Test block, doc and line comments."""
        assert _kinds("/* a */") == [COMMENT]
        assert _kinds("/** a */") == [DOC_COMMENT]
        assert _kinds("/**/") == [COMMENT]
        assert _kinds("// class X") == [COMMENT]
        assert _kinds("# class X") == [COMMENT]

    def test_unterminated_comment_runs_to_end(self):
        """Test a block comment without closer."""
        assert _kinds("/* class X\nnamespace Y;") == [COMMENT]

    def test_strings_and_variables(self):
        """Test string literals and variables."""
        assert _kinds("$name = 'class A';") == [VARIABLE, WHITESPACE, "=", WHITESPACE, STRING, ";"]
        assert _kinds('"namespace \\" B"') == [STRING]

    def test_open_tag(self):
        """Test the opening tag."""
        assert _kinds("<?php\n")[:1] == [OPEN_TAG]

    def test_bare_characters_are_strings(self):
        """Test that punctuation comes back as single characters."""
        tokens = tokenize("{};()")

        assert tokens == ["{", "}", ";", "(", ")"]
        assert not any(is_classified(token) for token in tokens)
