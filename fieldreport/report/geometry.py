from __future__ import annotations

from dataclasses import dataclass

# RGB palette shared by every report form.
PRIMARY_BLUE = (26, 47, 79)
ACCENT_BLUE = (37, 99, 235)
LIGHT_GRAY = (249, 250, 251)
BORDER_GRAY = (229, 231, 235)
TEXT_GRAY = (100, 100, 100)
CHECK_GREEN = (34, 197, 94)
TABLE_HEADER_GRAY = (240, 240, 240)
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


@dataclass(frozen=True)
class LayoutConfig:
    """Page size, margins and element metrics, all in millimetres.

    Font sizes are in points. Every layout component reads its geometry from
    here, so the same engine serves other page sizes and orientations.
    """

    page_width: float = 210.0
    page_height: float = 297.0
    margin_left: float = 15.0
    margin_right: float = 15.0
    margin_top: float = 15.0
    margin_bottom: float = 20.0

    block_gap: float = 5.0
    box_inset: float = 3.0

    section_band_height: float = 8.0
    section_accent_width: float = 2.0
    section_top_gap: float = 5.0
    section_keep_with_next: float = 12.0
    section_font_size: float = 10.0
    section_after_gap: float = 2.0

    label_font_size: float = 7.0
    value_font_size: float = 9.0

    grid_row_height: float = 14.0
    grid_padding: float = 4.0
    grid_label_offset: float = 3.0
    grid_value_offset: float = 7.0

    text_line_height: float = 4.0
    text_padding: float = 8.0
    text_min_height: float = 16.0

    gallery_image_height: float = 80.0
    gallery_caption_height: float = 12.0
    gallery_gap: float = 5.0
    caption_font_size: float = 8.0

    signature_band_height: float = 50.0
    signature_title_extra: float = 4.0
    signature_box_height: float = 25.0
    signature_gap: float = 3.0
    signature_max_column_width: float = 60.0
    signature_min_column_width: float = 30.0

    checkbox_row_height: float = 7.0
    checkbox_size: float = 3.0

    table_row_height: float = 5.0
    table_font_size: float = 6.0

    footer_font_size: float = 7.0

    def __post_init__(self) -> None:
        if self.page_width <= 0 or self.page_height <= 0:
            raise ValueError('page dimensions must be positive')
        if self.content_width <= 0:
            raise ValueError('margins leave no horizontal room for content')
        usable = self.usable_height
        smallest_unit = max(
            self.grid_row_height + self.grid_padding,
            self.gallery_box_height,
            self.signature_band_height + self.signature_title_extra,
            self.section_band_height + self.section_keep_with_next,
            self.text_min_height,
            self.table_row_height * 2,
        )
        if usable < smallest_unit:
            raise ValueError(
                f'usable page height {usable:.1f}mm cannot hold a single layout row '
                f'({smallest_unit:.1f}mm required)'
            )

    @property
    def content_width(self) -> float:
        return self.page_width - self.margin_left - self.margin_right

    @property
    def bottom_limit(self) -> float:
        return self.page_height - self.margin_bottom

    @property
    def usable_height(self) -> float:
        return self.bottom_limit - self.margin_top

    @property
    def signatures_per_band(self) -> int:
        room = self.content_width - 2 * self.signature_gap
        return max(1, int(room // self.signature_min_column_width))

    @property
    def gallery_box_height(self) -> float:
        return self.gallery_image_height + self.gallery_caption_height

    @property
    def gallery_slot_width(self) -> float:
        return (self.content_width - 2 * self.gallery_gap) / 2
