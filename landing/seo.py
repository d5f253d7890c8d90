"""
Open Graph image for link previews: the amber to rose page gradient with the
brand name and a centred headline.
"""
import textwrap
from io import BytesIO
from django.conf import settings
from PIL import Image, ImageDraw, ImageFont

OG_SIZE = (1200, 630)
AMBER = (245, 158, 11)
ROSE = (244, 63, 94)


def _gradient(size):
    """Top to bottom blend from amber to rose."""
    mask = Image.linear_gradient('L').resize(size)
    return Image.composite(
        Image.new('RGB', size, ROSE),
        Image.new('RGB', size, AMBER),
        mask,
    )


def _draw_centered_lines(draw, lines, font, top, spacing):
    width = OG_SIZE[0]
    y = top
    for line in lines:
        draw.text((width // 2, y), line, font=font, fill='white', anchor='mt')
        left, upper, right, lower = draw.textbbox((0, 0), line, font=font)
        y += (lower - upper) + spacing
    return y


def generate_og_image(title, subtitle=None):
    """
    Render the preview image.

    Args:
        title: Headline, wrapped to fit
        subtitle: Optional line under the headline

    Returns:
        BytesIO positioned at the start of the PNG data
    """
    img = _gradient(OG_SIZE)
    draw = ImageDraw.Draw(img)

    brand_font = ImageFont.load_default(size=38)
    title_font = ImageFont.load_default(size=76)
    subtitle_font = ImageFont.load_default(size=42)

    # Sun badge and brand name
    draw.ellipse([60, 50, 120, 110], fill='white')
    draw.ellipse([74, 64, 106, 96], fill=AMBER)
    draw.text((135, 80), settings.SITE_NAME, font=brand_font, fill='white', anchor='lm')

    y = _draw_centered_lines(draw, textwrap.wrap(title, width=26), title_font, top=220, spacing=20)
    if subtitle:
        _draw_centered_lines(draw, textwrap.wrap(subtitle, width=44), subtitle_font, top=y + 20, spacing=15)

    draw.text(
        (OG_SIZE[0] // 2, OG_SIZE[1] - 50),
        "Launching soon - join the waitlist",
        font=subtitle_font,
        fill='white',
        anchor='mb',
    )

    buffer = BytesIO()
    img.save(buffer, format='PNG')
    buffer.seek(0)
    return buffer
