from __future__ import annotations

import io
import json
from typing import Protocol

import qrcode

from .model import Booking


class QrTokenGenerator(Protocol):
    def token_for(self, booking: Booking) -> str:
        raise NotImplementedError


class JsonQrTokenGenerator:
    """Token scanned at the front desk: the booking id, room and start time as JSON."""

    def token_for(self, booking: Booking) -> str:
        return json.dumps(
            {
                "bookingId": booking.booking_id,
                "room": booking.room_id,
                "time": booking.start_time.isoformat(),
            },
            separators=(",", ":"),
        )


def render_png(token: str) -> io.BytesIO:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=2,
    )
    qr.add_data(token)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, "PNG")
    buf.seek(0)
    return buf
