"""
Tests for the ImageProcessor service
"""

import logging

import numpy as np
import pytest
from PIL import Image

from pixelflow.core.buffer import PixelBuffer
from pixelflow.core.config import Settings
from pixelflow.core.enums import Operation, Preset
from pixelflow.core.exceptions import ConstructionError, InvalidParameter
from pixelflow.filters import color, convolution, geometry
from pixelflow.schemas import Dimensions, PipelineStep
from pixelflow.services.processor import ImageProcessor


@pytest.fixture
def processor(noise_buffer):
    return ImageProcessor(noise_buffer)


class TestConstruction:
    """Test processor construction and data access"""

    def test_from_bytes(self):
        processor = ImageProcessor.from_bytes(bytes(range(16)), 2, 2)
        assert processor.get_data() == bytes(range(16))
        assert processor.get_dimensions() == Dimensions(width=2, height=2, pixels=4)

    def test_from_bytes_size_mismatch(self):
        with pytest.raises(ConstructionError) as exc_info:
            ImageProcessor.from_bytes(bytes(15), 2, 2)
        assert exc_info.value.expected == 16
        assert exc_info.value.actual == 15

    def test_from_array(self, test_image):
        processor = ImageProcessor.from_array(test_image)
        assert (processor.width, processor.height) == (64, 48)
        assert np.array_equal(processor.to_array(), test_image)

    def test_from_pil(self):
        processor = ImageProcessor.from_pil(Image.new("RGB", (5, 3), (1, 2, 3)))
        assert processor.get_dimensions().pixels == 15
        assert processor.to_pil().getpixel((4, 2)) == (1, 2, 3, 255)

    def test_from_opencv(self):
        image = np.zeros((3, 4, 3), dtype=np.uint8)
        image[..., 0] = 200  # blue
        processor = ImageProcessor.from_opencv(image)
        assert processor.buffer.pixels[0, 0].tolist() == [0, 0, 200, 255]
        assert np.array_equal(processor.to_opencv(with_alpha=False), image)

    def test_base64_round_trip(self, processor, noise_image):
        restored = ImageProcessor.from_base64(processor.to_base64())
        assert np.array_equal(restored.to_array(), noise_image)

    def test_clone_is_independent(self, processor, noise_image):
        copy = processor.clone()
        copy.invert()
        assert np.array_equal(processor.to_array(), noise_image)
        assert not np.array_equal(copy.to_array(), noise_image)
        assert copy.settings is processor.settings

    def test_explicit_settings(self, noise_buffer):
        settings = Settings(default_blur_radius=2.0)
        assert ImageProcessor(noise_buffer, settings).settings is settings

    def test_repr(self, processor):
        assert repr(processor) == "ImageProcessor(23x17)"


class TestChaining:
    """Test fluent operation methods"""

    def test_methods_return_self(self, processor):
        assert processor.grayscale() is processor
        assert processor.brightness(10).contrast(-10).sepia().invert() is processor
        assert processor.blur(1).sharpen(1).edge_detect() is processor
        assert processor.flip_horizontal().flip_vertical() is processor
        assert processor.rotate90().resize(4, 4) is processor

    def test_matches_filter_functions(self, processor, noise_buffer):
        expected = noise_buffer.clone()
        color.grayscale(expected)
        convolution.blur(expected, 2)
        color.brightness(expected, 15)

        processor.grayscale().blur(2).brightness(15)

        assert processor.buffer == expected

    def test_rotate_swaps_dimensions(self, processor):
        processor.rotate90()
        assert processor.get_dimensions() == Dimensions(width=17, height=23, pixels=391)

    def test_resize_replaces_buffer(self, processor, noise_buffer, noise_image):
        processor.resize(8, 6)

        assert processor.buffer is not noise_buffer
        assert (processor.width, processor.height) == (8, 6)
        assert np.array_equal(noise_buffer.pixels, noise_image)

    def test_in_place_operations_keep_buffer(self, processor, noise_buffer):
        processor.invert().flip_vertical().blur(1)
        assert processor.buffer is noise_buffer

    def test_blur_default_radius_from_settings(self, noise_buffer):
        expected = noise_buffer.clone()
        convolution.blur(expected, 2.0)

        ImageProcessor(noise_buffer, Settings(default_blur_radius=2.0)).blur()

        assert noise_buffer == expected

    def test_sharpen_defaults_from_settings(self, noise_buffer):
        """Test that amount and radius both come from the processor settings"""
        expected = noise_buffer.clone()
        convolution.sharpen(expected, 2.5, radius=2.0)

        settings = Settings(sharpen_radius=2.0, default_sharpen_amount=2.5)
        ImageProcessor(noise_buffer, settings).sharpen()

        assert noise_buffer == expected

    def test_brightness_and_contrast_default_to_identity(self, processor, noise_image):
        processor.brightness().contrast()
        assert np.array_equal(processor.to_array(), noise_image)

    @pytest.mark.parametrize(
        "call",
        [
            lambda p: p.blur(0),
            lambda p: p.blur(51),
            lambda p: p.sharpen(6),
            lambda p: p.brightness(101),
            lambda p: p.contrast(-101),
            lambda p: p.resize(0, 10),
        ],
    )
    def test_invalid_arguments_leave_image(self, processor, noise_image, call):
        with pytest.raises(InvalidParameter):
            call(processor)
        assert np.array_equal(processor.to_array(), noise_image)
        assert (processor.width, processor.height) == (23, 17)


class TestApply:
    """Test dispatch by operation name"""

    def test_by_name(self, processor, noise_buffer):
        expected = noise_buffer.clone()
        color.contrast(expected, 30)

        processor.apply("contrast", amount=30)

        assert processor.buffer == expected

    def test_by_enum_and_case(self, processor, noise_image):
        processor.apply(Operation.INVERT).apply("INVERT")
        assert np.array_equal(processor.to_array(), noise_image)

    def test_reshaping_by_name(self, processor):
        processor.apply("resize", new_width=3, new_height=2)
        assert processor.get_dimensions().pixels == 6

    def test_sharpen_radius_argument(self, processor, noise_buffer):
        expected = noise_buffer.clone()
        convolution.sharpen(expected, 1, radius=3)

        processor.apply("sharpen", amount=1, radius=3)

        assert processor.buffer == expected

    def test_unknown_operation(self, processor):
        with pytest.raises(InvalidParameter) as exc_info:
            processor.apply("posterize")
        assert exc_info.value.argument == "operation"

    def test_unexpected_argument(self, processor, noise_image):
        with pytest.raises(InvalidParameter) as exc_info:
            processor.apply("grayscale", radius=2)
        assert exc_info.value.argument == "radius"
        assert np.array_equal(processor.to_array(), noise_image)

    def test_missing_argument(self, processor):
        with pytest.raises(InvalidParameter) as exc_info:
            processor.apply("blur")
        assert exc_info.value.argument == "radius"


class TestPipeline:
    """Test validated multi-step pipelines"""

    def test_matches_manual_sequence(self, noise_buffer):
        manual = ImageProcessor(noise_buffer.clone())
        manual.sepia().blur(1.5).rotate90().contrast(25)

        piped = ImageProcessor(noise_buffer.clone())
        piped.run_pipeline(
            [
                {"operation": "sepia"},
                {"operation": "blur", "params": {"radius": 1.5}},
                PipelineStep(operation=Operation.ROTATE_90),
                {"operation": "contrast", "params": {"amount": 25}},
            ]
        )

        assert piped.buffer == manual.buffer

    def test_invalid_step_runs_nothing(self, processor, noise_image):
        """Test that a bad final step is caught before the first step runs"""
        steps = [
            {"operation": "invert"},
            {"operation": "resize", "params": {"new_width": 4, "new_height": 4}},
            {"operation": "brightness", "params": {"amount": 500}},
        ]
        with pytest.raises(InvalidParameter) as exc_info:
            processor.run_pipeline(steps)

        assert exc_info.value.operation == "brightness"
        assert np.array_equal(processor.to_array(), noise_image)

    def test_unknown_operation_runs_nothing(self, processor, noise_image):
        with pytest.raises(InvalidParameter):
            processor.run_pipeline([{"operation": "invert"}, {"operation": "emboss"}])
        assert np.array_equal(processor.to_array(), noise_image)

    @pytest.mark.parametrize("step", ["blur", 3, None, ("invert", {})])
    def test_step_that_is_not_a_mapping(self, processor, noise_image, step):
        with pytest.raises(InvalidParameter) as exc_info:
            processor.run_pipeline([{"operation": "invert"}, step])

        error = exc_info.value
        assert error.operation == "run_pipeline"
        assert error.argument == "steps"
        assert "Pipeline step 1" in str(error)
        assert np.array_equal(processor.to_array(), noise_image)

    @pytest.mark.parametrize("params", [[1, 2], "radius=2", 5])
    def test_params_that_are_not_a_mapping(self, processor, noise_image, params):
        with pytest.raises(InvalidParameter) as exc_info:
            processor.run_pipeline([{"operation": "blur", "params": params}])

        error = exc_info.value
        assert error.operation == "blur"
        assert error.argument == "params"
        assert error.value == params
        assert "Pipeline step 0" in str(error)
        assert np.array_equal(processor.to_array(), noise_image)

    def test_string_argument_in_step(self, processor, noise_image):
        with pytest.raises(InvalidParameter):
            processor.run_pipeline([{"operation": "blur", "params": {"radius": "2"}}])
        assert np.array_equal(processor.to_array(), noise_image)

    def test_empty_pipeline(self, processor, noise_image):
        assert processor.run_pipeline([]) is processor
        assert np.array_equal(processor.to_array(), noise_image)


class TestPresets:
    """Test named presets"""

    @pytest.mark.parametrize(
        "preset,manual",
        [
            (Preset.NASHVILLE, lambda p: p.brightness(10).contrast(5).sepia()),
            (Preset.CLARENDON, lambda p: p.contrast(20).brightness(5)),
            (Preset.LOMO, lambda p: p.contrast(15).brightness(-10)),
        ],
    )
    def test_matches_manual_sequence(self, noise_buffer, preset, manual):
        expected = manual(ImageProcessor(noise_buffer.clone()))
        result = ImageProcessor(noise_buffer).apply_preset(preset)
        assert result.buffer == expected.buffer

    def test_shorthands(self, noise_buffer):
        for name in ("nashville", "clarendon", "lomo"):
            expected = ImageProcessor(noise_buffer.clone()).apply_preset(name)
            shorthand = getattr(ImageProcessor(noise_buffer.clone()), f"filter_{name}")()
            assert shorthand.buffer == expected.buffer

    def test_preserves_alpha(self, processor, noise_image):
        processor.filter_nashville()
        assert np.array_equal(processor.to_array()[..., 3], noise_image[..., 3])

    def test_unknown_preset(self, processor, noise_image):
        with pytest.raises(InvalidParameter) as exc_info:
            processor.apply_preset("valencia")
        assert exc_info.value.operation == "apply_preset"
        assert np.array_equal(processor.to_array(), noise_image)


class TestTimingLogs:
    """Test per-operation timing logs"""

    def test_logged_when_enabled(self, noise_buffer, caplog):
        caplog.set_level(logging.INFO, logger="pixelflow.services.processor")
        ImageProcessor(noise_buffer, Settings(log_timings=True)).grayscale().rotate90()

        messages = [
            r.getMessage() for r in caplog.records if r.name == "pixelflow.services.processor"
        ]
        assert len(messages) == 2
        assert messages[0].startswith("grayscale on 23x17 took ")
        assert messages[1].startswith("rotate90 on 17x23 took ")
        assert messages[1].endswith(" ms")

    def test_silent_by_default(self, processor, caplog):
        caplog.set_level(logging.DEBUG, logger="pixelflow.services.processor")
        processor.invert()
        assert not [r for r in caplog.records if "took" in r.getMessage()]


def test_geometry_functions_accept_processor_buffer(processor):
    """Test that the processor's buffer works with the free functions too"""
    rotated = geometry.rotate90(processor.buffer)
    assert isinstance(rotated, PixelBuffer)
    assert (rotated.width, rotated.height) == (17, 23)
