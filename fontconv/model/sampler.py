"""
Pixel Samplers - Composable Pixel Accessors
===========================================
Every glyph reads its pixels through a sampler. Adapters provide the
innermost sampler, and each geometry transform wraps the current one in
a new sampler that remaps coordinates before delegating.

    SmoothScaleSampler(ShiftSampler(SourceSampler(source, ch), 2))

Chains only ever grow by wrapping, so they cannot become circular.

All samplers work in cell coordinates. Queries outside the cell are
passed through; sources answer 0 for anything they don't cover.
"""


class PixelSampler:
    """
    Base sampler interface.

    Subclasses implement sample(x, y) returning an intensity in
    [0, 2**bpp). Samplers are also callable for convenience.
    """

    def sample(self, x: int, y: int) -> int:
        raise NotImplementedError

    def __call__(self, x: int, y: int) -> int:
        return self.sample(x, y)

    def chain(self):
        """Return the list of samplers from this one down to the source."""
        samplers = [self]
        inner = getattr(self, "inner", None)
        while inner is not None:
            samplers.append(inner)
            inner = getattr(inner, "inner", None)
        return samplers


class SourceSampler(PixelSampler):
    """
    Bind a source's (ch, x, y) function to one codepoint.

    Args:
        source: Callable taking (ch, x, y) and returning an intensity
        ch: Codepoint to sample
    """

    def __init__(self, source, ch: int):
        self.source = source
        self.ch = ch

    def sample(self, x: int, y: int) -> int:
        return self.source(self.ch, x, y)

    def __repr__(self):
        return f"SourceSampler(ch={self.ch})"


class FunctionSampler(PixelSampler):
    """Wrap a plain (x, y) callable, used by pre-built glyphs."""

    def __init__(self, func):
        self.func = func

    def sample(self, x: int, y: int) -> int:
        return self.func(x, y)


class ShiftSampler(PixelSampler):
    """Read row y + dy of the wrapped sampler (positive dy moves content up)."""

    def __init__(self, inner: PixelSampler, dy: int):
        self.inner = inner
        self.dy = dy

    def sample(self, x: int, y: int) -> int:
        return self.inner.sample(x, y + self.dy)

    def __repr__(self):
        return f"ShiftSampler(dy={self.dy})"


class ScaleSampler(PixelSampler):
    """Nearest-neighbour 2x upscale."""

    def __init__(self, inner: PixelSampler):
        self.inner = inner

    def sample(self, x: int, y: int) -> int:
        return self.inner.sample(x >> 1, y >> 1)

    def __repr__(self):
        return "ScaleSampler()"


class SmoothScaleSampler(PixelSampler):
    """
    Edge-directed 2x upscale (AdvMAME2x / Scale2x).

    Each source pixel P expands into four quadrants. With neighbours
    A (above), B (right), C (left) and D (below):

        top-left     = A if C == A and C != D and A != B else P
        top-right    = B if A == B and A != C and B != D else P
        bottom-left  = C if D == C and D != B and C != A else P
        bottom-right = D if B == D and B != A and D != C else P
    """

    def __init__(self, inner: PixelSampler):
        self.inner = inner

    def sample(self, x: int, y: int) -> int:
        sx = x >> 1
        sy = y >> 1
        src = self.inner.sample
        p = src(sx, sy)
        a = src(sx, sy - 1)
        b = src(sx + 1, sy)
        c = src(sx - 1, sy)
        d = src(sx, sy + 1)

        right = x & 1
        bottom = y & 1
        if not bottom and not right:
            if c == a and c != d and a != b:
                return a
        elif not bottom:
            if a == b and a != c and b != d:
                return b
        elif not right:
            if d == c and d != b and c != a:
                return c
        else:
            if b == d and b != a and d != c:
                return d
        return p

    def __repr__(self):
        return "SmoothScaleSampler()"
