# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for path compilation and evaluation."""

import pytest

from genro_treeconfig import (
    NO_MATCH,
    AttributeMatch,
    ElementMatch,
    InvalidPathError,
    PathResolver,
    Tree,
    build_path_from_segments,
    casefold_path,
    compile_path,
    parse_tree,
    value_of,
)


TICKS = b"""<config>
  <tick type="origin">5</tick>
  <tick type="other">9</tick>
  <general>
    <interval unit="s">30</interval>
    <tick type="nested">7</tick>
  </general>
</config>"""


@pytest.fixture
def tree():
    return parse_tree(TICKS)


@pytest.fixture
def resolver():
    return PathResolver()


class TestCompilePath:
    """Tests for compile_path."""

    def test_compile_is_cached(self):
        """Test compiled expressions are reused."""
        assert compile_path('/config/master') is compile_path('/config/master')

    def test_cache_is_keyed_by_namespaces(self):
        """Test the same path with other namespaces compiles separately."""
        plain = compile_path('/config')
        scoped = compile_path('/config', {'c': 'urn:cfg'})
        assert plain is not scoped
        assert scoped is compile_path('/config', {'c': 'urn:cfg'})

    @pytest.mark.parametrize('path', [
        '/config/',
        "/config/tick[@type='origin'",
        "/config/tick[@type='origin]",
        '/config/tick[]',
        '/config/tick[@]',
        '/config/@',
    ])
    def test_invalid_paths(self, path):
        """Test malformed expressions raise InvalidPathError."""
        with pytest.raises(InvalidPathError):
            compile_path(path)

    def test_invalid_path_keeps_path(self):
        """Test the error carries the offending path."""
        with pytest.raises(InvalidPathError) as info:
            compile_path("/a[@b='1'")
        assert info.value.path == "/a[@b='1'"
        assert "/a[@b='1'" in str(info.value)

    def test_invalid_path_is_value_error(self):
        """Test InvalidPathError can be caught as ValueError."""
        with pytest.raises(ValueError):
            compile_path('/config/')

    def test_non_string_raises_type_error(self):
        """Test that a non-string path raises TypeError."""
        with pytest.raises(TypeError, match="must be str"):
            compile_path(None)


class TestCasefoldPath:
    """Tests for casefold_path."""

    def test_lowers_names_not_literals(self):
        """Test names are lowered and literal values kept."""
        assert casefold_path("/Config/Tick[@Type='Origin']/@Unit") == "/config/tick[@type='Origin']/@unit"

    def test_double_quoted_literal(self):
        """Test double-quoted literals are kept too."""
        assert casefold_path('/A[@B="Mixed Case"]') == '/a[@b="Mixed Case"]'

    def test_mixed_case_keywords(self):
        """Test operator keywords in any case become lower case."""
        path = "/A/B[@X='One' Or @Y='Two' AND Not(@Z)]"
        assert casefold_path(path) == "/a/b[@x='One' or @y='Two' and not(@z)]"

    def test_quote_inside_other_quotes(self):
        """Test an apostrophe inside a double-quoted literal is kept."""
        assert casefold_path('/A[@B="It\'s"]/C') == '/a[@b="It\'s"]/c'


class TestBuildPath:
    """Tests for build_path_from_segments."""

    def test_join_segments(self):
        """Test segments become an absolute path."""
        assert build_path_from_segments(['config', 'master']) == '/config/master'

    def test_single_segment(self):
        """Test a single segment."""
        assert build_path_from_segments(('config',)) == '/config'

    def test_resolver_exposes_builder(self):
        """Test PathResolver offers the same helper."""
        assert PathResolver.build_path_from_segments(['a', 'b']) == '/a/b'


class TestEvaluateFirst:
    """Tests for PathResolver.evaluate_first."""

    def test_element_match(self, tree, resolver):
        """Test an element path returns ElementMatch."""
        match = resolver.evaluate_first(tree, '/config/general/interval')
        assert isinstance(match, ElementMatch)
        assert match.element.tag == 'interval'

    def test_attribute_match(self, tree, resolver):
        """Test an attribute path returns AttributeMatch."""
        match = resolver.evaluate_first(tree, '/config/general/interval/@unit')
        assert isinstance(match, AttributeMatch)
        assert match.name == 'unit'
        assert match.owner.tag == 'interval'
        assert match.value == 's'

    def test_no_match(self, tree, resolver):
        """Test a path selecting nothing returns NO_MATCH."""
        assert resolver.evaluate_first(tree, '/config/missing') is NO_MATCH
        assert resolver.evaluate_first(tree, '/other') is NO_MATCH
        assert resolver.evaluate_first(tree, '/config/tick/@missing') is NO_MATCH

    def test_first_in_document_order(self, tree, resolver):
        """Test the first of several matches is returned."""
        match = resolver.evaluate_first(tree, '/config/tick')
        assert value_of(match) == ('5', True)

    def test_predicate_selects_matching_tick(self, tree, resolver):
        """Test [@type='origin'] selects only the first tick."""
        assert value_of(resolver.evaluate_first(tree, "/config/tick[@type='origin']")) == ('5', True)
        assert value_of(resolver.evaluate_first(tree, "/config/tick[@type='other']")) == ('9', True)

    def test_predicate_not_equal(self, tree, resolver):
        """Test [@attr!='v']."""
        match = resolver.evaluate_first(tree, "/config/tick[@type!='origin']")
        assert value_of(match) == ('9', True)

    def test_predicate_is_case_sensitive(self, tree, resolver):
        """Test literal comparison is exact."""
        assert resolver.evaluate_first(tree, "/config/tick[@type='Origin']") is NO_MATCH

    def test_position_predicate(self, tree, resolver):
        """Test [n] is 1-based among filtered siblings."""
        assert value_of(resolver.evaluate_first(tree, '/config/tick[2]')) == ('9', True)
        assert resolver.evaluate_first(tree, '/config/tick[3]') is NO_MATCH
        assert resolver.evaluate_first(tree, '/config/tick[0]') is NO_MATCH

    def test_child_and_self_predicates(self, tree, resolver):
        """Test [child='v'] and [.='v'] compare text."""
        match = resolver.evaluate_first(tree, "/config/general[interval='30']")
        assert isinstance(match, ElementMatch)
        assert match.element.tag == 'general'
        assert value_of(resolver.evaluate_first(tree, "/config/tick[.='9']/@type")) == ('other', True)

    def test_predicates_compare_untrimmed_text(self, resolver):
        """Test predicate literals are compared to the text as written."""
        tree = parse_tree(b'<config><general><interval> 30 </interval></general></config>')
        assert resolver.evaluate_first(tree, "/config/general[interval='30']") is NO_MATCH
        match = resolver.evaluate_first(tree, "/config/general[interval=' 30 ']")
        assert isinstance(match, ElementMatch)
        assert match.element.tag == 'general'
        # the returned value is still trimmed
        assert value_of(resolver.evaluate_first(tree, '/config/general/interval')) == ('30', True)

    def test_boolean_predicates(self, tree, resolver):
        """Test and/or combinations."""
        path = "/config/tick[@type='x' or @type='other']"
        assert value_of(resolver.evaluate_first(tree, path)) == ('9', True)
        path = "/config/tick[@type and .='5']"
        assert value_of(resolver.evaluate_first(tree, path)) == ('5', True)

    def test_wildcards(self, tree, resolver):
        """Test * and @* select any name."""
        assert value_of(resolver.evaluate_first(tree, '/config/*/interval')) == ('30', True)
        assert value_of(resolver.evaluate_first(tree, '/config/general/interval/@*')) == ('s', True)

    def test_descendant_root(self, tree, resolver):
        """Test //config selects the root element."""
        match = resolver.evaluate_first(tree, '//config')
        assert isinstance(match, ElementMatch)
        assert match.element is tree.getroot()

    def test_descendant_document_order(self, resolver):
        """Test // results come back in document order."""
        tree = parse_tree(b'<a><b><c>1</c></b><c>2</c></a>')
        values = [el.text for el in resolver.iter_selected(tree, '//c')]
        assert values == ['1', '2']

    def test_descendant_nested_contexts_sorted(self, resolver):
        """Test nested contexts do not break document order."""
        tree = parse_tree(b'<r><a><a><x>1</x></a><x>2</x></a></r>')
        values = [el.text for el in resolver.iter_selected(tree, '//a/x')]
        assert values == ['1', '2']

    def test_descendant_attributes(self, tree, resolver):
        """Test //@attr collects attributes in document order."""
        values = [m.value for m in resolver.iter_selected(tree, '//tick/@type')]
        assert values == ['origin', 'other', 'nested']

    def test_descendant_position_is_per_parent(self, tree, resolver):
        """Test //tick[1] selects the first tick of each parent."""
        values = [el.text for el in resolver.iter_selected(tree, '//tick[1]')]
        assert values == ['5', '7']

    def test_namespaced_attribute(self, resolver):
        """Test xml:lang and lang are distinct attributes."""
        tree = parse_tree(b'<a xml:lang="en" lang="fr"/>')
        match = resolver.evaluate_first(tree, '/a/@xml:lang')
        assert match.name == '{http://www.w3.org/XML/1998/namespace}lang'
        assert value_of(match) == ('en', True)
        assert value_of(resolver.evaluate_first(tree, '/a/@lang')) == ('fr', True)

    @pytest.mark.parametrize('path', [
        'count(/config/tick)',
        "/config/tick[1] = '5'",
        "string(/config/tick)",
        '/config/text()',
        '/config/undefined-function()',
        '/x:config',
    ])
    def test_non_node_results_raise(self, tree, resolver, path):
        """Test expressions not selecting elements or attributes are rejected."""
        with pytest.raises(InvalidPathError):
            resolver.evaluate_first(tree, path)

    def test_invalid_path_raises(self, tree, resolver):
        """Test evaluation of a malformed path raises."""
        with pytest.raises(InvalidPathError):
            resolver.evaluate_first(tree, '/config/tick[@type')


class TestNamespaces:
    """Tests for prefixes given to PathResolver."""

    DOC = b'<configuration xmlns="urn:cfg"><master>True</master></configuration>'

    def test_default_namespace_needs_prefix(self, resolver):
        """Test unprefixed names do not match namespaced elements."""
        tree = parse_tree(self.DOC)
        assert resolver.evaluate_first(tree, '/configuration/master') is NO_MATCH

    def test_prefix_selects_namespaced_elements(self):
        """Test a mapped prefix addresses the default namespace."""
        tree = parse_tree(self.DOC)
        resolver = PathResolver({'c': 'urn:cfg'})
        match = resolver.evaluate_first(tree, '/c:configuration/c:master')
        assert value_of(match) == ('True', True)

    def test_namespaces_are_copied(self):
        """Test the resolver keeps its own mapping."""
        namespaces = {'c': 'urn:cfg'}
        resolver = PathResolver(namespaces)
        namespaces['d'] = 'urn:other'
        assert resolver.namespaces == {'c': 'urn:cfg'}


class TestEvaluateAll:
    """Tests for PathResolver.evaluate_all."""

    def test_zero_one_many(self, tree, resolver):
        """Test sequences of length 0, 1 and N."""
        assert len(list(resolver.evaluate_all(tree, '/config/missing'))) == 0
        assert len(list(resolver.evaluate_all(tree, '/config/general'))) == 1
        assert len(list(resolver.evaluate_all(tree, '/config/tick'))) == 2

    def test_results_are_independent_trees(self, tree, resolver):
        """Test each result is its own Tree, detached from the source."""
        first, second = resolver.evaluate_all(tree, '/config/tick')
        assert isinstance(first, Tree)
        assert first.getroot().tag == 'tick'
        assert first.getroot().getparent() is None
        assert first.getroot().tail is None
        first.getroot().text = 'changed'
        first.getroot().set('type', 'changed')
        assert second.getroot().text == '9'
        assert value_of(resolver.evaluate_first(tree, '/config/tick')) == ('5', True)
        assert tree.getroot()[0].get('type') == 'origin'

    def test_restartable(self, tree, resolver):
        """Test iterating twice yields fresh copies both times."""
        sequence = resolver.evaluate_all(tree, '/config/tick')
        first_pass = list(sequence)
        second_pass = list(sequence)
        assert [t.getroot().text for t in first_pass] == [t.getroot().text for t in second_pass]
        assert first_pass[0].getroot() is not second_pass[0].getroot()

    def test_already_yielded_results_do_not_change(self, tree, resolver):
        """Test later source mutation does not alter yielded results."""
        (result,) = resolver.evaluate_all(tree, "/config/tick[@type='origin']")
        tree.getroot()[0].text = 'mutated'
        assert result.getroot().text == '5'

    def test_attribute_path_raises(self, tree, resolver):
        """Test a path selecting attributes is rejected."""
        with pytest.raises(InvalidPathError, match="selects attributes"):
            resolver.evaluate_all(tree, '/config/tick/@type')

    def test_invalid_path_raises_eagerly(self, tree, resolver):
        """Test a malformed path fails before iteration."""
        with pytest.raises(InvalidPathError):
            resolver.evaluate_all(tree, '/config/')

    def test_lazy(self, tree, resolver):
        """Test results are produced on demand."""
        iterator = iter(resolver.evaluate_all(tree, '/config/tick'))
        assert next(iterator).getroot().text == '5'
