from lisper.reader.parser import Token, TokenStream, lex, parse

__all__ = ["Token", "TokenStream", "lex", "parse"]
