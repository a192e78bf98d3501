# Canned VariantAnimation descriptors for an encoded image.
#
# The firmware plays a VariantAnimation as a list of frames, each drawing the
# same Image at a position for a duration. The last field is the opacity for
# the logo fade; the screensaver does not fade and just passes 60.

import typing

# The display this is all drawn on.
SCREEN_WIDTH = 256
SCREEN_HEIGHT = 64

_LOGO_DURATION = 25
_LOGO_OPACITY_STEP = 5
_SCREENSAVER_DURATION = 75
_SCREENSAVER_UNUSED = 60

class Frame(typing.NamedTuple):
    x: int
    y: int
    duration: int
    opacity: int

class Animation(typing.NamedTuple):
    name: str
    frames: typing.List[Frame]

def centered(width: int, height: int,
             screen_width: int = SCREEN_WIDTH,
             screen_height: int = SCREEN_HEIGHT) -> typing.Tuple[int, int]:
    return ((screen_width // 2) - (width // 2),
            (screen_height // 2) - (height // 2))

def logo_frames(width: int, height: int,
                screen_width: int = SCREEN_WIDTH,
                screen_height: int = SCREEN_HEIGHT
                ) -> typing.Tuple[typing.List[Frame], typing.List[Frame]]:
    """Fade the image in, then out, in the middle of the screen."""
    x, y = centered(width, height, screen_width, screen_height)
    fade_in = [Frame(x, y, _LOGO_DURATION, opacity)
               for opacity in range(0, 101, _LOGO_OPACITY_STEP)]
    fade_out = list(reversed(fade_in))
    return (fade_in, fade_out)

def screensaver_frames(width: int, height: int,
                       screen_width: int = SCREEN_WIDTH,
                       screen_height: int = SCREEN_HEIGHT
                       ) -> typing.List[Frame]:
    """Pan from the middle to the right edge, to the left, back to middle."""
    start_x, y = centered(width, height, screen_width, screen_height)
    xs: typing.List[int] = []
    x = start_x
    while x + width < screen_width - 1:
        xs.append(x)
        x += 1
    while x >= 0:
        xs.append(x)
        x -= 1
    xs.extend(range(0, start_x + 1))
    return [Frame(x, y, _SCREENSAVER_DURATION, _SCREENSAVER_UNUSED)
            for x in xs]

def logo_animations(prefix: str, width: int, height: int,
                    screen_width: int = SCREEN_WIDTH,
                    screen_height: int = SCREEN_HEIGHT
                    ) -> typing.Tuple[Animation, Animation]:
    fade_in, fade_out = logo_frames(width, height, screen_width, screen_height)
    return (Animation(prefix, fade_in),
            Animation(f'{prefix}_reversed', fade_out))

def screensaver_animation(prefix: str, width: int, height: int,
                          screen_width: int = SCREEN_WIDTH,
                          screen_height: int = SCREEN_HEIGHT) -> Animation:
    return Animation(prefix, screensaver_frames(
        width, height, screen_width, screen_height))

def format_animation(animation: Animation, image_name: str) -> str:
    out = [f'const VariantAnimation {animation.name} = {{',
           f'    {len(animation.frames)},',
           '    {']
    for frame in animation.frames:
        out.append(f'        {{{frame.x}, {frame.y}, {frame.duration},'
                   f' {frame.opacity}, &{image_name}}},')
    out.append('    }')
    out.append('};')
    return '\n'.join(out) + '\n'
