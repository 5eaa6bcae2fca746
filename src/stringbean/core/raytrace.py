"""Line rasterisation on the pixel grid."""

PixelIntensity = tuple[tuple[int, int], float]


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def grid_raytrace(x0: float, y0: float, x1: float, y1: float) -> list[PixelIntensity]:
    """Trace the grid cells crossed by a line from (x0, y0) to (x1, y1).

    Endpoints are truncated to integer cells. Every cell that the line passes
    through is visited exactly once, so tracing in the opposite direction
    yields the same cells in reverse order. See
    https://playtechs.blogspot.com/2007/03/raytracing-on-grid.html

    Args:
        x0, y0: Start point
        x1, y1: End point

    Returns:
        List of ((x, y), intensity) pairs, intensity is always 1.0
    """
    x0, y0 = int(x0), int(y0)
    x1, y1 = int(x1), int(y1)

    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    x, y = x0, y0

    n = 1 + dx + dy
    x_inc = _sign(x1 - x0)
    y_inc = _sign(y1 - y0)

    error = dx - dy
    dx *= 2
    dy *= 2

    cells = []
    for _ in range(n):
        cells.append(((x, y), 1.0))

        if error > 0:
            x += x_inc
            error -= dy
        else:
            y += y_inc
            error += dx

    return cells
