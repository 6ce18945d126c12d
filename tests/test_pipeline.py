# tests/test_pipeline.py

import pytest

from qr_styling.errors import ConfigurationError, StageFailure
from qr_styling.models import (
    BitMatrix,
    FrameStyle,
    GradientType,
    ModuleShape,
    StylingOptions,
)
from qr_styling.pipeline import RenderResult, render_content, render_styled, run_stage
from qr_styling.raster import RasterImage


def test_default_options_return_the_base_raster(matrix: BitMatrix, base_raster: RasterImage) -> None:
    result = render_styled(matrix)
    assert result.success
    assert result.message == 'ok'
    assert result.image == base_raster
    assert result.stages_applied == []
    assert result.diagnostics == []


def test_explicit_base_is_passed_through(base_raster: RasterImage) -> None:
    result = render_styled(base=base_raster, options={'style': 'square', 'frame': 'none'})
    assert result.image == base_raster


@pytest.mark.parametrize(
    "options",
    [
        {'style': 'hexagon'},
        {'gradientType': 'conic', 'gradientColors': ['#000000']},
        {'gradientType': 'radial'},
        {'frame': 'triple'},
        {'errorCorrectionLevel': 'X'},
        {'foregroundColor': 'not-a-color'},
        {'cornerRadius': 0.9},
        {'logoUrl': 'https://example.com/l.png', 'logoSize': 0},
    ],
)
def test_configuration_errors_fail_fast(matrix: BitMatrix, options) -> None:
    result = render_styled(matrix, options, item_id='item-7')
    assert not result.success
    assert result.image is None
    assert result.item_id == 'item-7'
    assert [(e.stage, e.kind, e.level) for e in result.diagnostics] == [('config', 'configuration_error', 'error')]


def test_missing_matrix_and_base_is_a_configuration_error() -> None:
    result = render_styled()
    assert not result.success
    assert result.diagnostics[0].kind == 'configuration_error'


def test_render_content_reports_configuration_errors() -> None:
    result = render_content("hello", {'style': 'hexagon'})
    assert not result.success
    assert result.diagnostics[0].kind == 'configuration_error'


def test_render_content_reports_generation_errors() -> None:
    result = render_content("x" * 5000, {'errorCorrectionLevel': 'H'})
    assert not result.success
    assert result.diagnostics[0].kind == 'generation_error'


def test_stage_order(matrix: BitMatrix, logo_image) -> None:
    result = render_styled(matrix, {
        'gradientType': 'linear-vertical', 'gradientColors': ['#000000', '#1d3557'],
        'style': 'rounded',
        'frame': 'basic', 'frameText': 'Menu',
        'logoUrl': logo_image,
    })
    assert result.success
    assert result.stages_applied == ['gradient', 'restyle', 'frame', 'logo']
    assert result.diagnostics == []


def test_frame_dimensions_through_pipeline(matrix: BitMatrix) -> None:
    result = render_styled(matrix, {'frame': 'banner', 'frameText': 'Scan me'})
    # 330px code: 33px border on each side and a 60px caption strip
    assert result.image.size == (396, 456)


def test_failing_stage_passes_its_input_on(matrix: BitMatrix, base_raster: RasterImage) -> None:
    # A raster whose edge is not a multiple of the grid cannot be restyled
    odd = RasterImage.blank(333, 333, (255, 255, 255, 255))
    result = render_styled(matrix, {'style': 'dots', 'frame': 'basic'}, base=odd)

    assert result.success
    assert result.stages_applied == ['frame']
    assert [(e.stage, e.kind) for e in result.diagnostics] == [('restyle', 'stage_failure')]
    assert result.message == '1 stage(s) skipped after errors'
    # The frame was applied to the untouched 333px input
    assert result.image.size == (333 + 2 * 33, 333 + 2 * 33)


def test_low_contrast_is_reported(matrix: BitMatrix) -> None:
    result = render_styled(matrix, {'foregroundColor': '#777777', 'backgroundColor': '#888888'})
    assert result.success
    assert [e.kind for e in result.diagnostics] == ['low_contrast']


def test_run_stage_catches_unexpected_errors(base_raster: RasterImage) -> None:
    def broken(raster):
        raise ZeroDivisionError("boom")

    result = run_stage('custom', broken, base_raster)
    assert not result.ok
    assert result.image is base_raster
    assert result.event.stage == 'custom'
    assert result.event.kind == 'stage_failure'
    assert 'ZeroDivisionError' in result.event.message


def test_run_stage_success(base_raster: RasterImage) -> None:
    result = run_stage('noop', lambda raster: raster, base_raster)
    assert result.ok
    assert result.event is None


def test_run_stage_stage_failure(base_raster: RasterImage) -> None:
    def failing(raster):
        raise StageFailure("cannot do it", stage='custom')

    assert run_stage('custom', failing, base_raster).event.message == 'cannot do it'


def test_result_to_dict(matrix: BitMatrix) -> None:
    result = render_styled(matrix, {'style': 'dots'}, item_id='a1')
    assert isinstance(result, RenderResult)
    assert result.to_dict() == {
        'id': 'a1',
        'success': True,
        'message': 'ok',
        'width': 330,
        'height': 330,
        'stagesApplied': ['restyle'],
        'diagnostics': [],
    }


def test_render_content_uses_margin_and_ecc() -> None:
    result = render_content("https://example.com/menu", {'margin': 2, 'moduleSize': 4,
                                                          'errorCorrectionLevel': 'M'})
    assert result.success
    # version 2: 25 modules plus 2 * 2 quiet zone modules at 4px each
    assert result.image.size == (116, 116)


class TestStylingOptions:

    def test_camel_case_keys(self) -> None:
        opts = StylingOptions.from_dict({
            'gradientType': 'Radial', 'gradientColors': ['#000', '#3a0ca3'],
            'style': 'extra_rounded', 'frame': 'EDGE', 'frameText': ' Hi ',
            'frameColor': 'navy', 'logoUrl': 'https://example.com/l.png', 'logoSize': '25',
            'errorCorrectionLevel': 'h', 'finderShape': 'dots',
        })
        assert opts.gradient.type is GradientType.RADIAL
        assert opts.gradient.colors == ((0, 0, 0, 255), (0x3a, 0x0c, 0xa3, 255))
        assert opts.style.shape is ModuleShape.EXTRA_ROUNDED
        assert opts.style.finder_shape is ModuleShape.DOTS
        assert opts.frame.style is FrameStyle.EDGE
        assert opts.frame.text == ' Hi '
        assert opts.frame.color == (0, 0, 128, 255)
        assert opts.logo.size == 25.0
        assert opts.error_correction == 'H'

    def test_snake_case_keys(self) -> None:
        opts = StylingOptions.from_dict({
            'gradient_type': 'linear-horizontal', 'gradient_colors': ['#111111'],
            'shape': 'classy', 'frame_style': 'circular', 'logo_url': 'logo.png',
        })
        assert opts.gradient.type is GradientType.LINEAR_HORIZONTAL
        assert opts.style.shape is ModuleShape.CLASSY
        assert opts.frame.style is FrameStyle.CIRCULAR
        assert opts.logo.source == 'logo.png'

    def test_defaults(self) -> None:
        opts = StylingOptions.from_dict(None)
        assert not opts.gradient.enabled
        assert not opts.style.enabled
        assert not opts.frame.enabled
        assert opts.logo is None
        assert opts.to_dict()['style'] == 'square'
        assert opts.style.finder_shape is ModuleShape.SQUARE

    def test_corner_square_style_alias(self) -> None:
        opts = StylingOptions.from_dict({'style': 'dots', 'cornersSquareStyle': 'extra-rounded'})
        assert opts.style.finder_shape is ModuleShape.EXTRA_ROUNDED

    def test_error_carries_field(self) -> None:
        with pytest.raises(ConfigurationError) as info:
            StylingOptions.from_dict({'frame': 'triple'})
        assert info.value.field == 'frame style'
        assert isinstance(info.value, ValueError)


class TestBitMatrix:

    def test_properties(self, matrix: BitMatrix) -> None:
        assert matrix.size == 25
        assert matrix.version == 2
        assert matrix.raster_size(10) == 330
        assert matrix.is_dark(0, 0)
        assert 0 < matrix.dark_count < 25 * 25

    @pytest.mark.parametrize("size", [19, 22])
    def test_rejects_bad_sizes(self, size: int) -> None:
        with pytest.raises(ValueError):
            BitMatrix.from_rows([[False] * size for _ in range(size)])

    def test_rejects_non_square(self) -> None:
        rows = [[False] * 21 for _ in range(21)]
        rows[3] = [False] * 20
        with pytest.raises(ValueError):
            BitMatrix.from_rows(rows)
