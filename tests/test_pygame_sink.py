from __future__ import annotations

import pytest

pygame = pytest.importorskip("pygame")

from rendering.pygame_sink import BACKGROUND, PygameSkySink  # noqa: E402
from rendering.sinks import RenderSink  # noqa: E402
from rendering.star_field import ConstellationLabel, LineSegment, StarBuffer  # noqa: E402


@pytest.fixture
def sink() -> PygameSkySink:
    return PygameSkySink(pygame.Surface((200, 200)), radius_px=90.0)


def test_is_a_render_sink(sink: PygameSkySink) -> None:
    assert isinstance(sink, RenderSink)


def test_projection(sink: PygameSkySink) -> None:
    assert sink.project(0.0, 200.0, 0.0) == (100, 100)
    assert sink.project(0.0, 0.0, 200.0) == (100, 10)      # north, up
    assert sink.project(-200.0, 0.0, 0.0) == (190, 100)    # east, right
    assert sink.project(0.0, -50.0, 100.0) is None


def test_draw_star_at_zenith(sink: PygameSkySink) -> None:
    buf = StarBuffer(2)
    buf.data[0] = (0.0, 200.0, 0.0, 1.0, 1.0, 1.0, 2.0, 1.0)
    buf.count = 1
    sink.upload_stars(buf)
    sink.draw()
    assert sink.uploads == 1
    assert tuple(sink.surface.get_at((100, 100)))[:3] == (255, 255, 255)
    assert tuple(sink.surface.get_at((5, 5)))[:3] == BACKGROUND


def test_hidden_lines_are_not_drawn(sink: PygameSkySink) -> None:
    seg = LineSegment("Test", (0.0, 200.0, 0.0), (0.0, 141.4, 141.4), 0xFFFFFF, 1.0)
    sink.set_constellation_lines([seg], visible=False)
    sink.draw()
    assert tuple(sink.surface.get_at((100, 80)))[:3] == BACKGROUND

    sink.set_constellation_lines([seg], visible=True)
    sink.draw()
    assert tuple(sink.surface.get_at((100, 80)))[:3] != BACKGROUND


def test_dispose_blanks_the_view(sink: PygameSkySink) -> None:
    buf = StarBuffer(1)
    buf.data[0] = (0.0, 200.0, 0.0, 1.0, 1.0, 1.0, 2.0, 1.0)
    buf.count = 1
    sink.upload_stars(buf)
    sink.dispose()
    sink.draw()
    assert sink.disposed
    assert sink.buffer is None
    assert tuple(sink.surface.get_at((100, 100)))[:3] == BACKGROUND


def test_labels_need_a_font(sink: PygameSkySink) -> None:
    label = ConstellationLabel("Zenith", "ZEN", 90.0, 0.0, (0.0, 200.0, 0.0))
    sink.set_constellation_labels([label], visible=True)
    sink.draw()
    assert sink.labels == [label]
    assert tuple(sink.surface.get_at((100, 100)))[:3] == BACKGROUND


def test_labels_are_drawn_at_their_position() -> None:
    pygame.font.init()
    sink = PygameSkySink(pygame.Surface((200, 200)), radius_px=90.0,
                         label_font=pygame.font.Font(None, 18))
    label = ConstellationLabel("Zenith", "ZEN", 90.0, 0.0, (0.0, 200.0, 0.0))
    sink.set_constellation_labels([label], visible=True)
    sink.draw()
    around = {tuple(sink.surface.get_at((x, y)))[:3]
              for x in range(85, 116) for y in range(94, 107)}
    assert around - {BACKGROUND}

    sink.set_constellation_labels([label], visible=False)
    sink.draw()
    around = {tuple(sink.surface.get_at((x, y)))[:3]
              for x in range(85, 116) for y in range(94, 107)}
    assert around == {BACKGROUND}
