"""Animated text labels drawn from a proportional 16 x 16 glyph sheet."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum

MAX_TEXT_LENGTH = 1999
MAX_INPUT_LENGTH = 9
LINE_SPACING = 0.7
ANIMATION_DURATION = 100
VISIBILITY_THRESHOLD = 0.03
_GLYPH_UNITS = 64.0
_GLYPH_GAP = 4
_SPACE = 32
_BACKSPACE = 8
_DELETE = 127
_CARRIAGE_RETURN = 13
_LINE_FEED = 10
_WINDOW_WIDTH_UNITS = 16.0
_WINDOW_HEIGHT_UNITS = 12.0
_FADE_CENTRE_X = 8.0
_FADE_CENTRE_Y = 6.0
_FADE_SCALE = 1.5

HIDDEN = 0.0
TRANSPARENT = 0.2
SHOWN = 0.6
SELECTED = 0.8
FULLY_VISIBLE = 1.0

# Left and right edges of each glyph within its 64-unit cell.
_LEFT = (
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,
    0, 9, 11, 9, 9, 8, 8, 7, 8, 7, 7, 7, 6, 8, 9, 7,
    9, 7, 8, 7, 7, 7, 8, 7, 7, 7, 9, 6, 8, 7, 7, 7,
    9, 7, 9, 8, 9, 9, 9, 8, 8, 8, 7, 8, 8, 7, 8, 7,
    9, 8, 9, 7, 6, 8, 6, 7, 7, 6, 6, 10, 7, 7, 9, 5,
    5, 8, 9, 8, 8, 8, 6, 7, 8, 8, 8, 8, 8, 7, 8, 7,
    9, 8, 9, 8, 7, 8, 7, 7, 7, 7, 7, 7, 9, 6, 8, 0,
    0, 0, 0, 8, 7, 10, 8, 8, 3, 7, 0, 9, 7, 0, 0, 0,
    0, 7, 8, 8, 7, 10, 7, 8, 3, 9, 0, 10, 7, 0, 0, 0,
    0, 9, 11, 8, 10, 8, 10, 9, 4, 8, 7, 9, 7, 0, 7, 0,
    0, 8, 8, 8, 7, 8, 8, 9, 7, 7, 7, 9, 8, 8, 8, 7,
    8, 7, 8, 7, 7, 7, 7, 8, 8, 8, 8, 8, 4, 7, 3, 4,
    6, 9, 8, 8, 8, 8, 8, 0, 7, 8, 8, 8, 8, 6, 8, 8,
    8, 8, 8, 8, 8, 8, 8, 7, 7, 7, 7, 7, 4, 6, 3, 3,
    9, 9, 8, 8, 8, 8, 8, 0, 7, 8, 8, 8, 8, 6, 8, 6,
)

_RIGHT = (
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,
    10, 15, 22, 28, 29, 33, 33, 15, 15, 14, 20, 29, 14, 21, 14, 23,
    31, 17, 26, 26, 30, 26, 27, 25, 27, 27, 15, 14, 28, 28, 28, 25,
    37, 32, 29, 30, 32, 24, 24, 34, 32, 14, 21, 30, 23, 39, 32, 34,
    29, 36, 29, 27, 25, 32, 30, 43, 30, 28, 27, 19, 23, 16, 27, 26,
    15, 28, 29, 24, 28, 27, 20, 27, 27, 13, 13, 26, 13, 38, 26, 27,
    28, 28, 20, 23, 19, 27, 25, 37, 26, 26, 24, 19, 12, 19, 28, 0,
    0, 0, 0, 28, 25, 43, 28, 28, 18, 47, 0, 17, 43, 0, 0, 0,
    0, 16, 16, 25, 25, 23, 26, 22, 18, 44, 0, 17, 42, 0, 0, 0,
    0, 15, 28, 31, 29, 30, 13, 28, 17, 37, 20, 27, 29, 0, 36, 0,
    0, 30, 20, 20, 17, 27, 29, 15, 15, 13, 20, 27, 42, 41, 42, 24,
    32, 32, 32, 31, 31, 31, 40, 30, 24, 24, 24, 24, 15, 17, 18, 17,
    32, 33, 35, 35, 34, 35, 35, 0, 35, 32, 32, 32, 32, 27, 28, 27,
    28, 28, 28, 28, 28, 28, 43, 24, 27, 27, 27, 27, 14, 17, 18, 17,
    28, 27, 28, 28, 28, 28, 28, 0, 28, 26, 26, 26, 26, 25, 28, 25,
)


class Alignment(IntEnum):
    """Horizontal anchoring of a text field; KEEP leaves the current one."""

    KEEP = 0
    LEFT = 1
    CENTRE = 2
    RIGHT = 3


class TextId(IntEnum):
    """Identifiers of the translatable strings shown by the game."""

    VERSION = 0
    NAMES1 = 1
    NAMES2 = 2
    HOMEPAGE = 3
    NO_WARRANTY = 4

    MAIN_MENU = 10
    TRAINING = 11
    TWO_PLAYER = 12
    NETWORK_GAME = 13
    SETTINGS = 14
    COMPUTER_GAME = 15
    QUIT = 16
    HELP = 17

    CONTROLS = 20
    GRAPHICS = 21
    AUDIO = 22
    LANGUAGE = 23

    HELP_INTRODUCTION = 50
    HELP_RULES = 51
    HELP_NEXT_PAGE = 52
    HELP_PREVIOUS_PAGE = 53
    HELP_BACK = 54
    HELP_TUTORIAL = 55
    HELP_KEYS = 56

    BACK = 100
    APPLY = 101
    OK = 102
    CANCEL = 103

    EIGHT_BALL = 110
    NINE_BALL = 111

    PLAYER1 = 120
    PLAYER2 = 121

    NEW_NETWORK_GAME = 130
    JOIN_GAME = 131
    WAITING = 132
    IP_ADDRESS = 133
    CONNECT = 134

    CONFIRM_QUIT = 160

    CONTINUE = 170
    LEAVE_TABLE = 171

    PLACE_CUE_BALL = 180
    VIEWING = 181
    AIMING = 182
    DRAWING_BACK = 183
    SHOT = 184
    HAS_WON = 185
    IS_AT_TABLE = 186
    AND_HAS_BALL_IN_HAND = 187
    IN_HEAD_FIELD = 188
    DO_YOU_WANT = 189
    RERACK = 190
    SPOT_EIGHT = 191
    NEW_GAME = 192
    FOUL = 193
    FOUL1 = 194
    FOUL2 = 195
    FOULS1 = 196
    FOULS2 = 197
    NEW_EIGHT_BALL_RACK = 198
    NEW_NINE_BALL_RACK = 199

    MOUSE_SPEED = 200
    MOUSE_SLOW = 201
    MOUSE_NORMAL = 202
    MOUSE_FAST = 203
    MOUSE_VERY_FAST = 204
    INVERT_X = 205
    INVERT_X_ON = 206
    INVERT_X_OFF = 207
    INVERT_Y = 208
    INVERT_Y_ON = 209
    INVERT_Y_OFF = 210

    BALL_GEOMETRY = 220
    BALL_GEOMETRY_VERY_LOW = 221
    BALL_GEOMETRY_LOW = 222
    BALL_GEOMETRY_NORMAL = 223
    BALL_GEOMETRY_HIGH = 224

    BALL_TEXTURES = 230
    BALL_TEXTURES_VERY_LOW = 231
    BALL_TEXTURES_LOW = 232
    BALL_TEXTURES_NORMAL = 233
    BALL_TEXTURES_HIGH = 234

    TABLE_TEXTURES = 240
    TABLE_TEXTURES_VERY_LOW = 241
    TABLE_TEXTURES_LOW = 242
    TABLE_TEXTURES_NORMAL = 243
    TABLE_TEXTURES_HIGH = 244
    TABLE_TEXTURES_OFF = 245

    MENU_TEXTURES = 250
    MENU_TEXTURES_LOW = 251
    MENU_TEXTURES_NORMAL = 252

    REFLECTIONS = 260
    REFLECTIONS_OFF = 261
    REFLECTIONS_ON = 262

    RESOLUTION = 270
    RESOLUTION_640X480 = 271
    RESOLUTION_800X600 = 272
    RESOLUTION_1024X768 = 273
    RESOLUTION_1280X960 = 274
    RESOLUTION_1600X1200 = 275

    COLOUR_DEPTH = 280
    COLOUR_DEPTH_16 = 281
    COLOUR_DEPTH_24 = 282
    COLOUR_DEPTH_32 = 283

    SHADOWS = 290
    SHADOWS_OFF = 291
    SHADOWS_ON = 292

    TEXTURE_INTERPOLATION = 295
    TEXTURE_INTERPOLATION_OFF = 296
    TEXTURE_INTERPOLATION_LOW = 297
    TEXTURE_INTERPOLATION_NORMAL = 298
    TEXTURE_INTERPOLATION_HIGH = 299

    QUALITY = 300
    QUALITY_VERY_FAST = 301
    QUALITY_FAST = 302
    QUALITY_NORMAL = 303
    QUALITY_HIGH = 304
    QUALITY_VERY_HIGH = 305
    QUALITY_CUSTOM = 306

    NOTE = 310
    NOTE1 = 311
    NOTE2 = 312

    AMBIENT_LIGHT = 320
    AMBIENT_LIGHT_ON = 321
    AMBIENT_LIGHT_OFF = 322

    TABLE_LAMPS = 325
    TABLE_LAMPS1 = 326
    TABLE_LAMPS2 = 327
    TABLE_LAMPS3 = 328

    TABLE_COLOUR_BLEEDING = 330
    TABLE_COLOUR_BLEEDING_ON = 331
    TABLE_COLOUR_BLEEDING_OFF = 332

    FRAME_RATE = 335
    FRAME_RATE_ON = 336
    FRAME_RATE_OFF = 337

    EFFECT_VOLUME = 350
    EFFECT_VOLUME_0 = 351
    EFFECT_VOLUME_10 = 352
    EFFECT_VOLUME_20 = 353
    EFFECT_VOLUME_30 = 354
    EFFECT_VOLUME_40 = 355
    EFFECT_VOLUME_50 = 356
    EFFECT_VOLUME_60 = 357
    EFFECT_VOLUME_70 = 358
    EFFECT_VOLUME_80 = 359
    EFFECT_VOLUME_90 = 360
    EFFECT_VOLUME_100 = 361

    MUSIC_VOLUME = 370
    MUSIC_VOLUME_0 = 371
    MUSIC_VOLUME_10 = 372
    MUSIC_VOLUME_20 = 373
    MUSIC_VOLUME_30 = 374
    MUSIC_VOLUME_40 = 375
    MUSIC_VOLUME_50 = 376
    MUSIC_VOLUME_60 = 377
    MUSIC_VOLUME_70 = 378
    MUSIC_VOLUME_80 = 379
    MUSIC_VOLUME_90 = 380
    MUSIC_VOLUME_100 = 381

    LANGUAGE_CHOICE = 400

    REFEREE_NO_LEGAL_BREAK = 450
    REFEREE_CUE_BALL_POCKETED_ON_BREAK = 451
    REFEREE_NO_BALL_HIT = 452
    REFEREE_WRONG_BALL_HIT = 453
    REFEREE_NO_BALL_POCKETED_NO_CUSHION = 454
    REFEREE_BALL_IN_HEAD_FIELD_HIT = 455
    REFEREE_CUE_BALL_POCKETED = 456

    PLAYER1_NAME = 500
    PLAYER2_NAME = 501
    EXTRA_TEXT_LEFT = 510
    EXTRA_TEXT_RIGHT = 511

    CONTROLS_HELP = 600
    EIGHT_BALL_RULES = 700
    NINE_BALL_RULES = 800
    FPS = 899


@dataclass(frozen=True)
class GlyphRun:
    """One line of laid-out text.

    ``glyphs`` holds (character code, x origin) for every glyph that has
    a picture; the glyph quad spans one unit from its origin.
    """

    line: int
    y: float
    glyphs: tuple[tuple[int, float], ...]


def _check_code(code: int) -> None:
    if not 0 <= code < len(_RIGHT):
        raise ValueError(f"character code {code} is outside the glyph sheet")


def glyph_width(code: int) -> float:
    """Advance of glyph ``code`` in units of the text height."""
    _check_code(code)
    return (_RIGHT[code] - _LEFT[code] + _GLYPH_GAP) / _GLYPH_UNITS


def _codes(text: str) -> list[int]:
    try:
        return list(text.encode("latin-1"))
    except UnicodeEncodeError as exc:
        raise ValueError(f"text contains characters outside the glyph sheet: {exc}") from None


def text_aspect(text: str) -> float:
    """Width of ``text`` on a single line, relative to its height."""
    return sum(glyph_width(code) for code in _codes(text))


def _place(codes: list[int], delta: float) -> tuple[tuple[int, float], ...]:
    placed = []
    cursor = 0.0
    for code in codes:
        origin = cursor - _LEFT[code] / _GLYPH_UNITS
        if _RIGHT[code] and code != _SPACE:
            placed.append((code, origin))
        cursor = origin + (_RIGHT[code] + _GLYPH_GAP) / _GLYPH_UNITS
        if code == _SPACE:
            cursor += delta
    return tuple(placed)


class TextField:
    """A text label that fades and slides between positions and can take input."""

    def __init__(self) -> None:
        self._text = ""
        self.x = self.y = self.height = self.aspect = self.alpha = 0.0
        self._old_x = self._old_y = self._old_height = self._old_alpha = 0.0
        self.target_x = self.target_y = 0.0
        self.target_height = self.target_alpha = 0.0
        self.alignment = Alignment.LEFT
        self.animating = False
        self.signal = 0
        self._time = 0
        self.listening = False
        self.lines = 0
        self.max_width = 0.0

    @property
    def text(self) -> str:
        """The current text."""
        return self._text

    @property
    def visible(self) -> bool:
        """Whether the field is opaque enough to be drawn."""
        return self.alpha >= VISIBILITY_THRESHOLD

    def set_text(self, text: str) -> tuple[GlyphRun, ...]:
        """Replace the text (cut at a NUL or after 1999 characters) and lay it out."""
        text = text.split("\0", 1)[0][:MAX_TEXT_LENGTH]
        _codes(text)
        self._text = text
        return self.layout()

    def _aim(self, x: float, y: float, height: float, alignment: int) -> None:
        if alignment:
            self.alignment = Alignment(alignment)
        if self.alignment is Alignment.LEFT:
            self.target_x = x
        elif self.alignment is Alignment.CENTRE:
            self.target_x = x - 0.5 * self.aspect * height
        elif self.alignment is Alignment.RIGHT:
            self.target_x = x - self.aspect * height
        self.target_y = y
        self.target_height = height
        self.target_alpha = SHOWN

    def position(
        self, x: float, y: float, height: float, alignment: int = Alignment.KEEP
    ) -> None:
        """Move the field to a new place with an animation.

        A hidden field zooms in from around the centre of the screen.
        """
        self._aim(x, y, height, alignment)
        if self.alpha == HIDDEN:
            self.x = (self.target_x - _FADE_CENTRE_X) / _FADE_SCALE + _FADE_CENTRE_X
            self.y = (self.target_y - _FADE_CENTRE_Y) / _FADE_SCALE + _FADE_CENTRE_Y
            self.height = self.target_height / _FADE_SCALE
        self.signal = 0
        self._start_animation()

    def position_fixed(
        self, x: float, y: float, height: float, alignment: int = Alignment.KEEP
    ) -> None:
        """Move the field to a new place at once, leaving its opacity alone."""
        self._aim(x, y, height, alignment)
        self.x = self.target_x
        self.y = self.target_y
        self.height = self.target_height
        self.signal = 0

    def key(self, char: str) -> bool:
        """Feed a typed character to a listening field; True if it was used."""
        if not self.listening:
            return False
        code = ord(char)
        if code > _DELETE:
            return False
        if code >= _SPACE and code != _DELETE:
            if len(self._text) < MAX_INPUT_LENGTH:
                self._text += char
            self.layout()
            return True
        if code in (_BACKSPACE, _DELETE):
            if 0 < len(self._text) <= MAX_INPUT_LENGTH:
                self._text = self._text[:-1]
            self.layout()
            return True
        if code in (_CARRIAGE_RETURN, _LINE_FEED):
            self.target_alpha = SHOWN
            self.listening = False
            self._animate_if_needed()
            return True
        return False

    def deactivate(self) -> None:
        """Fade the field out while zooming away from the screen centre."""
        self.target_alpha = HIDDEN
        self.target_x = (self.x - _FADE_CENTRE_X) * _FADE_SCALE + _FADE_CENTRE_X
        self.target_y = (self.y - _FADE_CENTRE_Y) * _FADE_SCALE + _FADE_CENTRE_Y
        self.target_height = self.height * _FADE_SCALE
        self.listening = False
        self._animate_if_needed()

    def select(self) -> None:
        """Flash the field as chosen, then settle back to normal."""
        self.alpha = SELECTED
        self.target_alpha = SHOWN
        self._animate_if_needed()

    def show(self) -> None:
        """Fade to the normal opacity."""
        self.target_alpha = SHOWN
        self._animate_if_needed()

    def show_fully(self) -> None:
        """Fade to full opacity."""
        self.target_alpha = FULLY_VISIBLE
        self._animate_if_needed()

    def stop_listening(self) -> None:
        """Stop taking keyboard input."""
        if self.alpha and self.target_alpha:
            self.show()
        self.listening = False

    def start_listening(self) -> None:
        """Take keyboard input and highlight the field."""
        self.show_fully()
        self.listening = True

    def animate(self, step: int) -> bool:
        """Advance the animation by ``step`` ticks; True when it just finished."""
        if not self.animating:
            return False
        self._time += step
        if self._time >= ANIMATION_DURATION:
            self.x = self.target_x
            self.y = self.target_y
            self.height = self.target_height
            self.alpha = self.target_alpha
            self.animating = False
            return True
        factor = 0.5 - 0.5 * math.cos(math.pi * self._time / ANIMATION_DURATION)
        self.x = (self.target_x - self._old_x) * factor + self._old_x
        self.y = (self.target_y - self._old_y) * factor + self._old_y
        self.height = (self.target_height - self._old_height) * factor + self._old_height
        self.alpha = (self.target_alpha - self._old_alpha) * factor + self._old_alpha
        return False

    def set_signal(self, signal: int) -> None:
        """Set the value a click on this field reports."""
        self.signal = signal

    def mouse_button(
        self,
        left: bool,
        pressed: bool,
        x: int,
        y: int,
        window_width: int,
        window_height: int,
    ) -> int:
        """Handle a mouse button event at window pixel (x, y).

        Returns 0 when the field is not hit, -1 when the event is consumed
        without a result, and the field's signal when the left button is
        released over it.
        """
        xf = _WINDOW_WIDTH_UNITS * x / window_width
        yf = _WINDOW_HEIGHT_UNITS - _WINDOW_HEIGHT_UNITS * y / window_height
        hit = (
            self.target_alpha > 0.0
            and self.signal != 0
            and self.x <= xf <= self.x + self.height * self.aspect
            and self.y <= yf <= self.y + self.height
        )
        if not hit:
            return 0
        if not left:
            return -1
        if pressed:
            self.select()
            return -1
        return self.signal

    def set_max_width(self, width: float) -> None:
        """Set the width at which text wraps; 0 (or less) means no wrapping."""
        self.max_width = max(0.0, width)

    def layout(self) -> tuple[GlyphRun, ...]:
        """Place the glyphs of the text, line by line, and update the line count."""
        codes = _codes(self._text)
        if not self.max_width:
            self.aspect = sum(glyph_width(code) for code in codes)
            self.lines = 1
            return (GlyphRun(0, 0.0, _place(codes, 0.0)),)

        self.aspect = 0.0
        max_width = self.max_width
        limit = max_width * 1.05
        runs: list[GlyphRun] = []
        lines = 0
        pos = 0
        width_to_last_space = 0.0
        while pos < len(codes):
            start = pos
            spaces = 0
            last_space = 0
            width = 0.0
            while pos < len(codes) and width < limit:
                code = codes[pos]
                if code == _SPACE:
                    width_to_last_space = width
                    last_space = pos
                    spaces += 1
                width += glyph_width(code)
                pos += 1

            if pos < len(codes):
                # Justify everything before the last space across the width.
                delta = (
                    (max_width - width_to_last_space) / (spaces - 1) if spaces > 1 else 0.0
                )
                line = codes[start:last_space] if last_space > start else []
                runs.append(GlyphRun(lines, -lines * LINE_SPACING, _place(line, delta)))
                pos = max(last_space, start) + 1
                lines += 1
            else:
                delta = 0.0
                if width > max_width and spaces:
                    delta = (max_width - width) / spaces
                runs.append(
                    GlyphRun(lines, -lines * LINE_SPACING, _place(codes[start:], delta))
                )
                lines += 1
                break
        self.lines = lines
        return tuple(runs)

    def field_height(self) -> float:
        """Height taken up by all lines of the text."""
        return LINE_SPACING * self.lines

    def _animate_if_needed(self) -> None:
        if self.target_alpha != self.alpha:
            self._start_animation()

    def _start_animation(self) -> None:
        self.animating = True
        self._time = 0
        self._old_x = self.x
        self._old_y = self.y
        self._old_height = self.height
        self._old_alpha = self.alpha