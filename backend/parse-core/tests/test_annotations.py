from cir.nodes import AnnotationNode
from extractors.annotations import annotation_value, extract_annotations


def test_marker_annotation_has_empty_value():
    assert extract_annotations([AnnotationNode(name="Deprecated")]) == {"Deprecated": ""}


def test_named_pairs_are_joined():
    size = AnnotationNode(name="Size", pairs=(("min", "1"), ("max", "10")))
    assert annotation_value(size) == "min=1, max=10"


def test_single_value_is_kept_verbatim():
    warnings = AnnotationNode(name="SuppressWarnings", value='{"unchecked", "rawtypes"}')
    assert extract_annotations([warnings]) == {"SuppressWarnings": '{"unchecked", "rawtypes"}'}


def test_repeated_annotation_keeps_last():
    annotations = [
        AnnotationNode(name="Tag", value='"a"'),
        AnnotationNode(name="Tag", value='"b"'),
    ]
    assert extract_annotations(annotations) == {"Tag": '"b"'}
