import math

import pytest

from anchorscript.ast import BinOp, Literal, Ref, SelfRef
from anchorscript.evaluate import collect_anchors, evaluate, parse_and_evaluate
from anchorscript.parser import parse_expr

DATA = {
    'a': {'right': 100.0, 'width': 50.0, 'left': 50.0},
    'b': {'right': 200.0, 'width': 80.0, 'left': 120.0},
    '$self': {'width': 7.0},
}


def lookup(shape_id, anchor):
    shape = DATA.get(shape_id)
    if shape is None:
        raise KeyError(f'Shape "{shape_id}" not found')
    return shape[anchor]


@pytest.mark.parametrize('value', [0.0, 42.0, -3.5, 1e-9, 12345.678])
def test_literal_evaluates_to_itself(value):
    assert evaluate(Literal(value), lookup) == value


def test_ref_and_self_go_through_lookup():
    calls = []

    def recording(shape_id, anchor):
        calls.append((shape_id, anchor))
        return 1.0

    evaluate(BinOp('+', Ref('a', 'right'), SelfRef('width')), recording)
    assert calls == [('a', 'right'), ('$self', 'width')]


@pytest.mark.parametrize(
    'text, expected',
    [
        ('#a.right + 10', 110.0),
        ('#b.right - 50', 150.0),
        ('#a.width * 2', 100.0),
        ('#b.width / 4', 20.0),
        ('#a.right + #a.width * 2', 200.0),
        ('(#a.right + #a.width) * 2', 300.0),
        ('#a.width + (#b.width * 2) - 10', 200.0),
        ('$self.width * 2', 14.0),
        ('10 - 3 - 2', 5.0),
    ],
)
def test_parse_and_evaluate(text, expected):
    assert parse_and_evaluate(text, lookup) == expected
    assert parse_and_evaluate(text, lookup) == evaluate(parse_expr(text), lookup)


def test_division_by_zero_follows_float_semantics():
    assert parse_and_evaluate('1 / 0', lookup) == math.inf
    assert parse_and_evaluate('-1 / 0', lookup) == -math.inf
    assert math.isnan(parse_and_evaluate('0 / 0', lookup))


def test_lookup_errors_propagate_unchanged():
    with pytest.raises(KeyError) as exc:
        parse_and_evaluate('#missing.right + 1', lookup)
    assert 'Shape "missing" not found' in str(exc.value)


def test_collect_anchors_in_left_to_right_order():
    assert collect_anchors(parse_expr('42')) == []
    assert collect_anchors(parse_expr('#a.right')) == ['right']
    assert collect_anchors(parse_expr('$self.width')) == ['width']
    assert collect_anchors(parse_expr('#a.right + #b.left * $self.width')) == [
        'right', 'left', 'width',
    ]


def test_collect_anchors_ignores_target_shape():
    assert collect_anchors(parse_expr('#a.top - #b.top')) == ['top', 'top']
