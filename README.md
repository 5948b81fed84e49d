# serikagl

Building blocks for a small renderer and CPU path tracer, written on top of
numpy and Pillow.

| Module | What it holds |
| --- | --- |
| `serikagl.mathutils` | Sobol, Halton and Hammersley sequences, radical inverses, Gray codes, primes, hemisphere sampling, reflection/refraction, Fresnel, GGX and Schlick terms, quadratic solver |
| `serikagl.buffer` | `Buffer`, a width x height grid of pixels with nearest and bilinear sampling (`FilterMode`) |
| `serikagl.imageutils` | reading images into RGBA buffers, writing PNG files, turning float images (such as depth maps) into greyscale |
| `serikagl.geometry` | `Ray`, `Intersection`, `Plane`, `BufferAttribute`, debug `FPoint` / `FLine`, cube mesh tables |
| `serikagl.light` | `Light` and its shader-side `LightData` for point, directional and spot lights |
| `serikagl.debugdraw` | `DebugPrimitives`, a thread-safe store of debug points, lines and triangles |
| `serikagl.raycast` | primary rays through screen pixels, hemisphere test points, clamping of accumulated radiance |
| `serikagl.logger` | `Logger`, a thread-safe leveled logger that can redirect to a callback |
| `serikagl.utils` | file reading, file extensions, vector/matrix printing, a console progress bar, path helpers |

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

### Low-discrepancy sampling

```python
from serikagl.mathutils import sobol, halton, hammersley, gray_code

points = [(sobol(0, gray_code(i)), sobol(1, gray_code(i))) for i in range(16)]
h = halton(0, 5)             # radical inverse of 5 in base 2
s = hammersley(0, 3, 16)     # 3 / 16 in the first dimension
```

`sobol(dimension, i)` supports dimensions 0 to 7 and raises `IndexError`
otherwise.

### Hemisphere sampling and shading terms

```python
from serikagl.mathutils import uniform_hemisphere_sample, fresnel, reflect

wo, pdf = uniform_hemisphere_sample((0, 0, -1), (0, 1, 0), depth=0, sobol_index=7)
kr = fresnel((0, -1, 0), (0, 1, 0), 1.5)
r = reflect((1, -1, 0), (0, 1, 0))
```

A negative `sobol_index` draws random numbers instead of Sobol values.

### Pixel buffers and images

```python
from serikagl.buffer import Buffer, FilterMode
from serikagl.imageutils import write_buffer, read_image_rgba

buf = Buffer(4, 4, (0, 0, 0, 255))
buf.set(1, 2, (255, 0, 0, 255))
print(buf.get_pixel(1, 2))                        # out of range reads give zeros
print(buf.sample_2d(0.3, 0.6, FilterMode.LINEAR))
write_buffer("out.png", buf, False)
img = read_image_rgba("out.png", False)           # rows flipped unless flip_y is True
```

### Rays

```python
import numpy as np
from serikagl.raycast import screen_to_world_ray

ray = screen_to_world_ray(
    320, 240, 640, 480,
    eye=np.zeros(3), view_matrix=np.eye(4),
    fov=60.0, aspect=640 / 480, near=0.1,
    jitter_radius=0.0, sobol_index=0,
)
print(ray.origin, ray.direction, ray.at(2.0))
```

A non-zero `jitter_radius` moves the ray inside the pixel using the Sobol
sequence at `sobol_index`.

### Lights

```python
from serikagl.light import Light, LightType

light = Light()
light.set_as_directional_light((0, -1, 0), (0.1, 0.1, 0.1), (1, 1, 1), (1, 1, 1))
assert light.type is LightType.DIRECTIONAL
data = light.serialize()              # a copy of the LightData
Light().deserialize(data)
```

### Debug primitives

```python
from serikagl.debugdraw import DebugPrimitives

debug = DebugPrimitives()
point = debug.draw_point((0, 1, 0), persist_time=5.0, point_size=3.0)
debug.draw_line((0, 0, 0), (1, 0, 0))
debug.draw_triangle((0, 0, 0), (1, 0, 0), (0, 1, 0))
debug.handle(on_point=print, on_line=print, on_triangle=print)
debug.remove_point(point.uuid)
debug.remove_all()
```

### Logging

Levels are ordered `INFO < DEBUG < WARNING < ERROR`; messages below the
minimum level are dropped.

```python
from serikagl.logger import Logger, LogLevel

logger = Logger()
logger.set_log_level(LogLevel.WARNING)
logger.log(LogLevel.ERROR, __file__, 1, "rendered %d frames", 10)
logger.set_log_func(None, lambda ctx, level, text: print(level.name, text))
```

## What the package does not do

There is no window, no GPU or OpenGL rendering, no scene graph, mesh loading or
acceleration structure, and no texture or render-target management. There is
no command to run: the package is a library of the pieces listed above.