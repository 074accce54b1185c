"""
The secp256k1 elliptic curve: affine point arithmetic with a precomputed table of generator doublings
"""
import json
from dataclasses import dataclass
from typing import Optional, Tuple

__all__ = ["EllipticCurve", "Point", "SECP256K1", "add_points", "multiply_generator", "scalar_multiplication",
           "is_point_on_curve", "is_valid_scalar"]


@dataclass(frozen=True)
class Point:
    """Immutable affine point. (None, None) is the point at infinity"""
    x: Optional[int] = None
    y: Optional[int] = None

    def __post_init__(self):
        if (self.x is None) != (self.y is None):
            raise ValueError("Point at infinity must have both coordinates as None")

    def __bool__(self) -> bool:
        """Point at infinity is falsy"""
        return self.x is not None

    def __iter__(self):
        """Allow tuple unpacking: x, y = point"""
        return iter((self.x, self.y))

    @property
    def tuple(self):
        return self.x, self.y


class EllipticCurve:
    """Short Weierstrass curve over a prime field"""

    def __init__(self, a: int, b: int, p: int, order: int, generator: Tuple[int, int] | Point,
                 curve: Optional[str] = None):
        """
        We instantiate an elliptic curve E of the form

            y^2 = x^3 + ax + b (mod p).

        The order is the order of the cyclic group E(F_p) generated by the given generator point.
        """
        disc = (4 * pow(a, 3) + 27 * pow(b, 2)) % p
        if disc == 0:
            raise ValueError("Cannot use Singular curve in ECC")

        self.a = a
        self.b = b
        self.p = p
        self.order = order
        self.generator = Point(*generator) if isinstance(generator, tuple) else generator
        self.curve = curve

        # 2^i * G for i in [0, 256)
        self._generator_doublings = self._precompute_generator_doublings()

    def __repr__(self):
        gx, gy = self.generator.x, self.generator.y
        hex_dict = {
            'a': hex(self.a),
            'b': hex(self.b),
            'p': hex(self.p),
            'order': hex(self.order),
            'generator': (hex(gx), hex(gy)),
        }
        if self.curve:
            hex_dict.update({'curve': self.curve})
        return json.dumps(hex_dict)

    def _precompute_generator_doublings(self) -> list[Point]:
        doublings = []
        current = self.generator
        for _ in range(self.order.bit_length()):
            doublings.append(current)
            current = self.double_point(current)
        return doublings

    def x_terms(self, x: int) -> int:
        """Compute x^3 + ax + b mod p"""
        return (pow(x, 3, self.p) + self.a * x + self.b) % self.p

    def is_valid_scalar(self, k: int) -> bool:
        """A usable private key or signature value: 1 <= k < n"""
        return 0 < k < self.order

    def is_point_on_curve(self, point: Point) -> bool:
        """Returns true if the given point is on the curve"""
        if not point:
            return True
        x, y = point
        if not (0 <= x < self.p and 0 <= y < self.p):
            return False
        return (y * y) % self.p == self.x_terms(x)

    def lift_x(self, x: int, odd_y: bool) -> Point:
        """
        Return the curve point with the given x coordinate and y parity. Only valid for p = 3 (mod 4).
        """
        if not 0 <= x < self.p:
            raise ValueError(f"x coordinate {x} out of field range")
        rhs = self.x_terms(x)
        y = pow(rhs, (self.p + 1) >> 2, self.p)
        if (y * y) % self.p != rhs:
            raise ValueError(f"Given x coordinate {x} is not on the curve.")
        if (y & 1) != int(odd_y):
            y = self.p - y
        return Point(x, y)

    def negate(self, point: Point) -> Point:
        if not point:
            return point
        return Point(point.x, (-point.y) % self.p)

    def double_point(self, point: Point) -> Point:
        if not point or point.y == 0:
            return Point()

        x, y = point
        # m = (3x^2 + a) / 2y
        m = ((3 * x * x + self.a) * pow(2 * y, -1, self.p)) % self.p
        x3 = (m * m - 2 * x) % self.p
        y3 = (m * (x - x3) - y) % self.p
        return Point(x3, y3)

    def add_points(self, point1: Point, point2: Point) -> Point:
        if not point1:
            return point2
        if not point2:
            return point1

        x1, y1 = point1
        x2, y2 = point2

        if x1 == x2:
            if y1 == y2:
                return self.double_point(point1)
            return Point()

        m = ((y2 - y1) * pow(x2 - x1, -1, self.p)) % self.p
        x3 = (m * m - x1 - x2) % self.p
        y3 = (m * (x1 - x3) - y1) % self.p
        return Point(x3, y3)

    def scalar_multiplication(self, n: int, point: Point) -> Point:
        """
        Double-and-add. Uses the precomputed table when the point is the generator
        """
        if not point:
            return Point()

        n = n % self.order
        if n == 0:
            return Point()

        if point == self.generator:
            return self.multiply_generator(n)

        result = Point()
        addend = point
        while n > 0:
            if n & 1:
                result = self.add_points(result, addend)
            addend = self.double_point(addend)
            n >>= 1
        return result

    def multiply_generator(self, n: int) -> Point:
        """Multiply generator by scalar n"""
        n = n % self.order
        result = Point()
        bit = 0
        while n:
            if n & 1:
                result = self.add_points(result, self._generator_doublings[bit])
            n >>= 1
            bit += 1
        return result


# --- SINGLETON INSTANCE --- #
_secp256k1_params = {
    'a': 0,
    'b': 7,
    'p': 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F,
    'order': 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
    'generator': (0x79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798,
                  0x483ada7726a3c4655da4fbfc0e1108a8fd17b448a68554199c47d08ffb10d4b8),
    'curve': "secp256k1"
}

SECP256K1 = EllipticCurve(**_secp256k1_params)


# --- CONVENIENCE FUNCTIONS --- #

def add_points(point1: Point, point2: Point) -> Point:
    """Add two points on the secp256k1 curve"""
    return SECP256K1.add_points(point1, point2)


def multiply_generator(n: int) -> Point:
    """Multiply the secp256k1 generator by scalar n"""
    return SECP256K1.multiply_generator(n)


def scalar_multiplication(n: int, point: Point) -> Point:
    """Multiply any point by scalar n on secp256k1 curve"""
    return SECP256K1.scalar_multiplication(n, point)


def is_point_on_curve(point: Point) -> bool:
    """Check if point is on secp256k1 curve"""
    return SECP256K1.is_point_on_curve(point)


def is_valid_scalar(k: int) -> bool:
    """Check k is a usable secp256k1 private key"""
    return SECP256K1.is_valid_scalar(k)
