"""Python implementation of a Taichi-based Whitted-style sphere raytracer.

This package renders static scenes of spheres by casting one ray per pixel
through a viewport, with support for:
- Exact ray-sphere intersection in single precision
- Ambient, point and directional lights with hard shadows
- Phong diffuse and specular shading
- Bounded recursive mirror reflection

Subpackages:
    core: Vector and color primitives, lighting, the trace loop and frames
    geometry: Sphere intersection
    scene: Object/light collections and the scene container
    camera: Camera models and pixel-to-ray mapping
    preview: Image export utilities
"""

__version__ = "0.1.0"
