"""A simulated first-fit heap with vectors, strings, boxes, reference counting and borrow cells."""

__version__ = "0.1.0"
__all__ = ["manager", "vec", "boxed", "string", "rc", "refcell"]