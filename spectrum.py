import sys
from argparse import ArgumentParser

from domaincolor import (
    REPEAT_FUNCTIONS,
    Coefficients,
    ConfigurationError,
    ImageDescriptor,
    ImageWriteError,
    LightnessAlgorithm,
    Roots,
    RootsOfUnity,
    compute_window,
    render,
)

VERBOSE = False


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


def build_parser():
    parser = ArgumentParser(description='Render a domain coloring of a complex polynomial.')

    parser.add_argument('--width', type=int,
                        dest='width', help='width of the output image in pixels',
                        metavar='WIDTH', default=512)

    parser.add_argument('--height', type=int,
                        dest='height', help='height of the output image in pixels',
                        metavar='HEIGHT', default=512)

    parser.add_argument('--xres', type=float,
                        dest='xres', help='distance along the real axis covered by one pixel',
                        metavar='XRES', default=0.01)

    parser.add_argument('--yres', type=float,
                        dest='yres', help='distance along the imaginary axis covered by one pixel',
                        metavar='YRES', default=0.01)

    function = parser.add_mutually_exclusive_group()
    function.add_argument('--coefficients', type=str,
                          help='comma separated coefficients in ascending power, e.g. "1,0,1j" for 1 + i z^2')
    function.add_argument('--roots', type=str,
                          help='comma separated roots, e.g. "1,-1,0.5+0.5j"')
    function.add_argument('--unity', type=int, metavar='N',
                          help='render z^N - 1')

    parser.add_argument('--lightness', type=str, default=LightnessAlgorithm.EXP2.value,
                        choices=[member.value for member in LightnessAlgorithm],
                        help='how lightness follows the modulus of the value')

    parser.add_argument('--repeat', type=str, default=None, choices=sorted(REPEAT_FUNCTIONS),
                        help='overlay periodic bands: rings on the modulus, rings on log2 of the modulus, or phase rays')

    parser.add_argument('--clamp-threshold', type=float, default=None, dest='clamp_threshold',
                        help='squared modulus above which lightness is pinned just below white (e.g. 256)')

    parser.add_argument('--workers', type=int, default=1,
                        help='number of row bands rendered concurrently')

    parser.add_argument('--output', dest='output', type=str, default='spectrum.png',
                        help='destination image file')

    parser.add_argument('--format', type=str,
                        dest='format', help='lossless image format (png, bmp, tiff, ppm). Defaults to the output extension.',
                        metavar='FORMAT', default=None)

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging.')

    return parser


def _parse_complex_list(text: str, parser: ArgumentParser, option: str) -> list[complex]:
    values = []
    for token in text.split(','):
        token = token.strip().replace(' ', '')
        if not token:
            continue
        try:
            values.append(complex(token))
        except ValueError:
            parser.error(f"{option}: '{token}' is not a complex number (use Python syntax such as 1-2j).")
    return values


def resolve_function(opt, parser: ArgumentParser):
    if opt.coefficients is not None:
        return Coefficients(_parse_complex_list(opt.coefficients, parser, '--coefficients'))
    if opt.roots is not None:
        return Roots(_parse_complex_list(opt.roots, parser, '--roots'))
    if opt.unity is not None:
        if opt.unity < 0:
            parser.error('--unity must be a non-negative integer.')
        return RootsOfUnity(opt.unity)
    return Coefficients([0, 1])


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    function = resolve_function(opt, parser)
    repeat = REPEAT_FUNCTIONS[opt.repeat] if opt.repeat else None

    try:
        descriptor = ImageDescriptor(width=opt.width, height=opt.height, xres=opt.xres, yres=opt.yres)
        window = compute_window(descriptor)
        log("function: %s" % (function,))
        log("X: [%.6g, %.6g]  Y: [%.6g, %.6g]" % (window.x_min, window.x_max, window.y_min, window.y_max))
        log("lightness: %s, repeat: %s, workers: %d" % (opt.lightness, opt.repeat or 'none', opt.workers))
        output_path = render(
            descriptor,
            function,
            opt.output,
            opt.lightness,
            repeat,
            clamp_threshold=opt.clamp_threshold,
            workers=opt.workers,
            vectorized=True,
            image_format=opt.format,
        )
    except (ConfigurationError, ImageWriteError) as exc:
        parser.exit(1, f"{parser.prog}: error: {exc}\n")

    log("wrote %s" % output_path)


if __name__ == '__main__':
    main(sys.argv[1:])
