import pytest

from anchorscript.lexer import ExprSyntaxError
from anchorscript.registry import AnchorRegistry, ResolutionError, ViewBox
from anchorscript.scene import ShapeSpec, load_scene, parse_view_box, run_pass


def test_shapes_resolve_against_earlier_shapes():
    reg = AnchorRegistry()
    records = run_pass(
        reg,
        [
            ShapeSpec('rect', 'boxA', {'x': 10, 'y': 10, 'width': 50, 'height': 30}),
            ShapeSpec('rect', 'boxB', {'x': '#boxA.right + 10', 'y': '#boxA.top',
                                       'width': '#boxA.width', 'height': '$self.width / 2'}),
        ],
    )
    assert [r.id for r in records] == ['boxA', 'boxB']
    assert reg.resolve('#boxB.left') == 70
    assert reg.resolve('#boxB.height') == 25
    assert reg.diagnostics == []


def test_forward_reference_is_an_error():
    reg = AnchorRegistry()
    with pytest.raises(ResolutionError) as exc:
        run_pass(
            reg,
            [
                ShapeSpec('rect', 'first', {'x': '#second.right'}),
                ShapeSpec('rect', 'second', {'x': 0}),
            ],
        )
    assert 'shape "second" not found' in str(exc.value)


def test_failure_keeps_partial_anchors_of_failing_shape():
    reg = AnchorRegistry()
    with pytest.raises(ResolutionError):
        run_pass(reg, [ShapeSpec('rect', 'r', {'width': 40, 'x': '#nope.left'})])
    assert reg.anchors_for('r') == {'width': 40.0}
    assert reg.realized_shapes == []


def test_syntax_error_aborts_pass():
    reg = AnchorRegistry()
    with pytest.raises(ExprSyntaxError):
        run_pass(reg, [ShapeSpec('point', 'p', {'x': '1 +'})])


def test_auto_ids_count_per_kind():
    reg = AnchorRegistry()
    records = run_pass(
        reg,
        [ShapeSpec('rect'), ShapeSpec('circle'), ShapeSpec('rect', 'named'), ShapeSpec('rect')],
    )
    assert [(r.id, r.auto_id) for r in records] == [
        ('rect-1', True),
        ('circle-1', True),
        ('named', False),
        ('rect-2', True),
    ]
    assert reg.resolve('#rect-2.width') == 0


def test_duplicate_ids_rejected():
    with pytest.raises(ResolutionError) as exc:
        run_pass(AnchorRegistry(), [ShapeSpec('point', 'p'), ShapeSpec('point', 'p')])
    assert 'duplicate shape id "p"' in str(exc.value)


def test_unknown_kind_rejected():
    with pytest.raises(ValueError):
        run_pass(AnchorRegistry(), [ShapeSpec('hexagon', 'h')])


def test_custom_realizers():
    def realize_tick(builder, props):
        builder.publish({'at': builder.value(props.get('at', 0), axis='x', prop='at')})
        return {}

    reg = AnchorRegistry()
    run_pass(
        reg,
        [ShapeSpec('tick', 't1', {'at': 4}), ShapeSpec('tick', 't2', {'at': '#t1.at * 2'})],
        realizers={'tick': realize_tick},
    )
    assert reg.resolve('#t2.at') == 8


def test_realizer_must_publish_final_anchors():
    def realize_half(builder, props):
        builder.publish_partial({'at': 1})
        return {}

    reg = AnchorRegistry()
    with pytest.raises(ValueError) as exc:
        run_pass(reg, [ShapeSpec('half', 'h')], realizers={'half': realize_half})
    assert 'did not publish' in str(exc.value)
    assert reg.realized_shapes == []


def test_each_pass_starts_from_reset():
    reg = AnchorRegistry()
    vb = ViewBox(0, 0, 100, 100)
    run_pass(reg, [ShapeSpec('rect', 'r1', {'width': 500})], vb)
    assert len(reg.diagnostics) == 1

    run_pass(reg, [ShapeSpec('rect', 'r2', {'width': 5})], vb)
    assert reg.diagnostics == []
    assert [r.id for r in reg.realized_shapes] == ['r2']
    with pytest.raises(ResolutionError):
        reg.resolve('#r1.width')


def test_pass_without_view_box_keeps_previous_one():
    # known quirk carried over from the registry: the stale view-box is still checked
    reg = AnchorRegistry()
    run_pass(reg, [], ViewBox(0, 0, 10, 10))
    run_pass(reg, [ShapeSpec('point', 'p', {'x': 50, 'y': 5})])
    assert [d.message.split(' ')[0] for d in reg.diagnostics] == ['Right']


def test_record_carries_output_properties():
    reg = AnchorRegistry()
    (record,) = run_pass(reg, [ShapeSpec('circle', 'c', {'r': 3, 'fill': 'blue'})])
    assert record.kind == 'circle'
    assert record.props == {'cx': 0, 'cy': 0, 'r': 3, 'fill': 'blue'}


@pytest.mark.parametrize(
    'raw, expected',
    [
        ('0 0 100 50', ViewBox(0, 0, 100, 50)),
        ('-10,-10,20,20', ViewBox(-10, -10, 20, 20)),
        ({'minX': 1, 'minY': 2, 'width': 3, 'height': 4}, ViewBox(1, 2, 3, 4)),
        ([0, 0, 5, 5], ViewBox(0, 0, 5, 5)),
    ],
)
def test_parse_view_box(raw, expected):
    assert parse_view_box(raw) == expected


@pytest.mark.parametrize('raw', ['0 0 100', {'minX': 0, 'minY': 0, 'width': 1}, 42])
def test_parse_view_box_rejects_bad_input(raw):
    with pytest.raises(ValueError):
        parse_view_box(raw)


def test_load_scene():
    shapes, vb = load_scene({
        'viewBox': '0 0 200 100',
        'shapes': [
            {'type': 'rect', 'id': 'a', 'x': 1, 'width': 2},
            {'type': 'point', 'x': '#a.right'},
        ],
    })
    assert vb == ViewBox(0, 0, 200, 100)
    assert shapes == [
        ShapeSpec('rect', 'a', {'x': 1, 'width': 2}),
        ShapeSpec('point', None, {'x': '#a.right'}),
    ]


def test_load_scene_requires_type():
    with pytest.raises(ValueError):
        load_scene({'shapes': [{'id': 'a'}]})
    with pytest.raises(ValueError):
        load_scene({'shapes': ['rect']})


def test_load_scene_without_view_box():
    shapes, vb = load_scene({'shapes': []})
    assert shapes == []
    assert vb is None
