"""Tests for the alias-preserving and literal resolvers."""

import pytest
from app.config.settings import SHORT_KEY_ROOTS
from app.lib.flatten import tokens_flatten
from app.lib.naming import scss_var
from app.lib.parser import (
    AliasResolver,
    CircularReferenceError,
    LiteralResolver,
    ReferenceIndex,
    TokenResolver,
    UnresolvableReferenceError,
)
from app.lib.quoting import css_format
from app.models.dataModel import TokenEntry


def by_path(tokens: list[TokenEntry], dotted: str) -> TokenEntry:
    return next(token for token in tokens if token.dotted == dotted)


def build(document: dict) -> tuple[list[TokenEntry], ReferenceIndex]:
    tokens = tokens_flatten(document)
    return tokens, ReferenceIndex.from_tokens(tokens, SHORT_KEY_ROOTS)


def test_resolvers_satisfy_protocol(index: ReferenceIndex) -> None:
    assert isinstance(AliasResolver(index), TokenResolver)
    assert isinstance(LiteralResolver(index), TokenResolver)


def test_alias_whole_value_reference(tokens, index) -> None:
    resolver = AliasResolver(index)
    assert resolver.resolve(by_path(tokens, "Theme.Primary.Base")) == "$blue500"
    assert resolver.resolve(by_path(tokens, "Theme.Primary.Hover")) == "$primaryBase"
    assert resolver.resolve(by_path(tokens, "Typography.Body.Family")) == "$fontFamilySans"


def test_alias_equals_target_identifier(tokens, index) -> None:
    alias = AliasResolver(index).resolve(by_path(tokens, "Theme.Primary.Dark"))
    assert alias == scss_var(("Foundations", "Blue", "700"))


def test_alias_interpolates_mixed_values(tokens, index) -> None:
    resolver = AliasResolver(index)
    assert resolver.resolve(by_path(tokens, "Spacing.Inset")) == '"#{$small} #{$medium}"'


def test_alias_literals_follow_quoting(tokens, index) -> None:
    resolver = AliasResolver(index)
    assert resolver.resolve(by_path(tokens, "Foundations.Blue.500")) == "#335CFF"
    assert resolver.resolve(by_path(tokens, "Spacing.Small")) == "4"
    assert resolver.resolve(by_path(tokens, "Spacing.Medium")) == "8"
    assert resolver.resolve(by_path(tokens, "Foundations.Font Family.Sans")) == '"Inter Display"'


def test_alias_padded_reference_is_still_an_alias() -> None:
    tokens, index = build(
        {"Theme": {"Base": {"$value": "#fff"}, "Alias": {"$value": "  {Theme.Base} "}}}
    )
    assert AliasResolver(index).resolve(by_path(tokens, "Theme.Alias")) == "$base"


def test_alias_unresolvable_reference() -> None:
    tokens, index = build({"Theme": {"Broken": {"$value": "{Theme.Missing}"}}})
    with pytest.raises(UnresolvableReferenceError, match="Theme.Missing"):
        AliasResolver(index).resolve(tokens[0])


def test_literal_transitive_chain(tokens, index) -> None:
    resolver = LiteralResolver(index)
    assert resolver.resolve(by_path(tokens, "Theme.Primary.Hover")) == "#335CFF"
    assert resolver.resolve(by_path(tokens, "Spacing.Inset")) == "4 8"
    assert resolver.resolve(by_path(tokens, "Spacing.Medium")) == 8


def test_literal_matches_target_for_aliases(tokens, index) -> None:
    resolver = LiteralResolver(index)
    alias = by_path(tokens, "Theme.Primary.Base")
    target = by_path(tokens, "Foundations.Blue.500")
    assert css_format(resolver.resolve(alias), alias.type) == css_format(
        resolver.resolve(target), target.type
    )


def test_literal_memoizes(tokens, index) -> None:
    cache: dict = {}
    resolver = LiteralResolver(index, cache)
    resolver.resolve(by_path(tokens, "Theme.Primary.Hover"))
    assert cache[("Theme", "Primary", "Hover")] == "#335CFF"
    assert cache[("Theme", "Primary", "Base")] == "#335CFF"
    assert cache[("Foundations", "Blue", "500")] == "#335CFF"


def test_literal_two_token_cycle() -> None:
    tokens, index = build({"Theme": {"A": {"$value": "{Theme.B}"}, "B": {"$value": "{Theme.A}"}}})
    resolver = LiteralResolver(index)
    with pytest.raises(CircularReferenceError) as exc_info:
        resolver.resolve(tokens[0])
    assert exc_info.value.path in ("Theme.A", "Theme.B")


def test_literal_self_reference() -> None:
    tokens, index = build({"Theme": {"Loop": {"$value": "1px {Theme.Loop}"}}})
    with pytest.raises(CircularReferenceError, match="Theme.Loop"):
        LiteralResolver(index).resolve(tokens[0])


def test_literal_cycle_failure_does_not_poison_other_tokens() -> None:
    tokens, index = build(
        {
            "Theme": {
                "A": {"$value": "{Theme.B}"},
                "B": {"$value": "{Theme.A}"},
                "C": {"$value": "#000"},
            }
        }
    )
    resolver = LiteralResolver(index)
    with pytest.raises(CircularReferenceError):
        resolver.resolve(tokens[0])
    assert resolver.resolve(tokens[2]) == "#000"
    assert ("Theme", "A") not in resolver.cache


def test_literal_unresolvable_reference() -> None:
    tokens, index = build({"Theme": {"Broken": {"$value": "calc({Nope} * 2)"}}})
    with pytest.raises(UnresolvableReferenceError) as exc_info:
        LiteralResolver(index).resolve(tokens[0])
    assert exc_info.value.reference == "Nope"


def test_literal_stringifies_numbers_in_composites() -> None:
    tokens, index = build(
        {"Spacing": {"Unit": {"$value": 4}, "Gap": {"$value": "calc({Unit} * 2px)"}}}
    )
    assert LiteralResolver(index).resolve(tokens[1]) == "calc(4 * 2px)"


def test_alias_quotes_number_with_trailing_newline() -> None:
    tokens, index = build({"Spacing": {"Odd": {"$value": "4px\n"}}})
    assert AliasResolver(index).resolve(tokens[0]) == '"4px\n"'


def test_literal_resolves_long_chains() -> None:
    length = 2000
    chain: dict = {"T0": {"$value": "#000"}}
    for i in range(1, length):
        chain[f"T{i}"] = {"$value": f"{{Theme.T{i - 1}}}"}
    tokens, index = build({"Theme": chain})
    resolver = LiteralResolver(index)
    assert resolver.resolve(tokens[-1]) == "#000"
    assert len(resolver.cache) == length


def test_literal_detects_cycle_at_end_of_long_chain() -> None:
    chain: dict = {"T0": {"$value": "{Theme.T999}"}}
    for i in range(1, 1000):
        chain[f"T{i}"] = {"$value": f"{{Theme.T{i - 1}}}"}
    tokens, index = build({"Theme": chain})
    resolver = LiteralResolver(index)
    with pytest.raises(CircularReferenceError):
        resolver.resolve(tokens[0])
    assert resolver.cache == {}
