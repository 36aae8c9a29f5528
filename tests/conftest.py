import base64
import io

import pytest
from PIL import Image

from photopanel.layout import ImageSlot, Margin


def make_image(w, h, color=(255, 0, 0)):
    return Image.new('RGB', (w, h), color)


def make_slot(w, h, index=0, rotation=0, margin=None, color=(255, 0, 0), name=''):
    return ImageSlot(index=index, image=make_image(w, h, color), rotation=rotation,
                     margin=margin or Margin(), name=name)


def png_data_url(w, h, color=(0, 0, 255)):
    buf = io.BytesIO()
    make_image(w, h, color).save(buf, format='PNG')
    return 'data:image/png;base64,' + base64.b64encode(buf.getvalue()).decode('ascii')


@pytest.fixture
def two_slots():
    # aspects 1.0 and 2.0
    return [make_slot(100, 100, 0), make_slot(200, 100, 1, color=(0, 255, 0))]
