# semantics/const_eval.py
"""Exact evaluator for Go constant expressions.

Values are folded to Python objects following Go's constant rules:

- integers are unbounded `int`s, range-checked whenever they acquire a typed
  integer type;
- untyped floating-point constants are `Fraction`s, so `1 << 62 / 2.0` stays
  exact;
- strings are the `bytes` they denote;
- booleans are `bool`.

Design:
- `iota` is the index of the spec within its const group
- Typed operands must agree; untyped operands adopt the other side's type
- Integer division truncates toward zero and `%` takes the dividend's sign
- Conversions `T(x)` and `len(s)` are the only calls allowed
- Constant dependencies are tracked on `evaluation_stack` for cycle detection

`infer_type` answers the question "what type does this constant have" without
evaluating anything, so constants referring to imported packages never need
to be evaluated unless they are enum members.
"""
from __future__ import annotations
from dataclasses import dataclass
from fractions import Fraction
from typing import TYPE_CHECKING, Dict, List, Optional, Union

from constenum.internals import errors as er
from constenum.semantics.ast import (
    Expr, IntLit, FloatLit, ImagLit, RuneLit, StringLit, Name, Selector, Call,
    BinaryOp, UnaryOp, Paren, CompositeLit,
)
from constenum.semantics.typesys import (
    Type, BasicType, NamedType, ValueKind, INT, UNTYPED_BOOL, UNTYPED_INT,
    UNTYPED_RUNE, UNTYPED_FLOAT, UNTYPED_STRING, underlying, is_untyped, is_integer,
)

if TYPE_CHECKING:
    from constenum.semantics.source_model import PackageModel, ConstSite

Value = Union[int, Fraction, bool, bytes]

_COMPARISONS = frozenset({'==', '!=', '<', '<=', '>', '>='})
_INTEGER_ONLY = frozenset({'%', '&', '|', '^', '&^'})
_MAX_SHIFT = 1024


@dataclass(frozen=True)
class ConstantValue:
    """Compile-time constant value with type information."""
    value: Value
    type: Type

    def __str__(self) -> str:
        v = self.value
        if isinstance(v, bytes):
            return '"' + v.decode('utf-8', errors='backslashreplace') + '"'
        if isinstance(v, bool):
            return 'true' if v else 'false'
        if isinstance(v, Fraction) and v.denominator != 1:
            return str(float(v))
        return str(int(v)) if isinstance(v, Fraction) else str(v)


@dataclass(frozen=True)
class _Env:
    iota: int
    filename: str


class ConstantEvaluator:
    """Compile-time constant expression evaluator for one package."""

    def __init__(self, model: "PackageModel"):
        self.model = model
        self.evaluation_stack: List[str] = []  # For cycle detection
        self.inference_stack: List[str] = []
        self._values: Dict[str, ConstantValue] = {}
        self._types: Dict[str, Optional[Type]] = {}

    # ------------------------
    # Public entry points
    # ------------------------

    def value_of(self, site: "ConstSite") -> ConstantValue:
        """Evaluate the constant declared at `site`."""
        name = site.name.name
        if name in self._values:
            return self._values[name]
        if name in self.evaluation_stack:
            cycle = " -> ".join(self.evaluation_stack[self.evaluation_stack.index(name):] + [name])
            raise er.SourceLoadError(er.ERR.CE1006, site.name.loc, site.filename, cycle=cycle)

        self.evaluation_stack.append(name)
        try:
            env = _Env(site.spec.iota, site.filename)
            expr = site.spec.values[site.index]
            result = self.evaluate(expr, env)
            if site.spec.type_ref is not None:
                declared = self.model.resolve_type_ref(site.spec.type_ref, site.filename)
                result = self._represent(result, declared, expr, env)
        finally:
            self.evaluation_stack.pop()

        self._values[name] = result
        return result

    def type_of(self, site: "ConstSite") -> Optional[Type]:
        """Return the type of the constant at `site` without evaluating it.

        Returns None when the type cannot be known locally, e.g. for a
        constant initialised from an imported package's constant.
        """
        name = site.name.name
        if name in self._types:
            return self._types[name]
        if site.spec.type_ref is not None:
            result = self.model.resolve_type_ref(site.spec.type_ref, site.filename)
        elif name in self.inference_stack:
            return None
        else:
            self.inference_stack.append(name)
            try:
                result = self.infer_type(site.spec.values[site.index], site.filename)
            finally:
                self.inference_stack.pop()
        self._types[name] = result
        return result

    # ------------------------
    # Type inference
    # ------------------------

    def infer_type(self, expr: Expr, filename: str) -> Optional[Type]:
        if isinstance(expr, IntLit):
            return UNTYPED_INT
        if isinstance(expr, FloatLit):
            return UNTYPED_FLOAT
        if isinstance(expr, RuneLit):
            return UNTYPED_RUNE
        if isinstance(expr, StringLit):
            return UNTYPED_STRING
        if isinstance(expr, Paren):
            return self.infer_type(expr.expr, filename)
        if isinstance(expr, UnaryOp):
            return self.infer_type(expr.expr, filename)
        if isinstance(expr, Name):
            site = self.model.const_site(expr.id)
            if site is not None:
                return self.type_of(site)
            if expr.id == 'iota':
                return UNTYPED_INT
            if expr.id in ('true', 'false'):
                return UNTYPED_BOOL
            return None
        if isinstance(expr, Call):
            target = self._conversion_target(expr.callee, filename)
            if target is not None:
                return target
            if isinstance(expr.callee, Name) and expr.callee.id == 'len':
                return INT
            return None
        if isinstance(expr, BinaryOp):
            if expr.op in _COMPARISONS:
                return UNTYPED_BOOL
            left = self.infer_type(expr.left, filename)
            if expr.op in ('<<', '>>'):
                return UNTYPED_INT if left == UNTYPED_FLOAT else left
            right = self.infer_type(expr.right, filename)
            if left is None or right is None:
                return None
            if not is_untyped(left):
                return left
            if not is_untyped(right):
                return right
            return max(left, right, key=lambda t: t.rank)
        return None

    # ------------------------
    # Evaluation
    # ------------------------

    def evaluate(self, expr: Expr, env: _Env) -> ConstantValue:
        """Evaluate an expression to a compile-time constant.

        Raises:
            SourceLoadError: the expression is not a valid constant expression.
        """
        if isinstance(expr, IntLit):
            return ConstantValue(expr.value, UNTYPED_INT)
        elif isinstance(expr, FloatLit):
            return ConstantValue(expr.value, UNTYPED_FLOAT)
        elif isinstance(expr, RuneLit):
            return ConstantValue(expr.value, UNTYPED_RUNE)
        elif isinstance(expr, StringLit):
            return ConstantValue(expr.value, UNTYPED_STRING)
        elif isinstance(expr, ImagLit):
            raise self._invalid(expr, env, f"complex constant {expr.literal} is not supported")
        elif isinstance(expr, Paren):
            return self.evaluate(expr.expr, env)
        elif isinstance(expr, Name):
            return self._eval_name(expr, env)
        elif isinstance(expr, Selector):
            raise self._invalid(expr, env, f"cannot evaluate {_dotted(expr)} from another package")
        elif isinstance(expr, CompositeLit):
            raise self._invalid(expr, env, "composite literal is not constant")
        elif isinstance(expr, Call):
            return self._eval_call(expr, env)
        elif isinstance(expr, UnaryOp):
            return self._eval_unary(expr, env)
        elif isinstance(expr, BinaryOp):
            return self._eval_binary(expr, env)
        er.raise_internal_error("CE0003", node=type(expr).__name__)

    def _eval_name(self, expr: Name, env: _Env) -> ConstantValue:
        site = self.model.const_site(expr.id)
        if site is not None:
            return self.value_of(site)
        if expr.id == 'iota':
            return ConstantValue(env.iota, UNTYPED_INT)
        if expr.id in ('true', 'false'):
            return ConstantValue(expr.id == 'true', UNTYPED_BOOL)
        if self.model.is_declared(expr.id) or self.model.lookup_type(expr.id) is not None:
            raise self._invalid(expr, env, f"{expr.id} is not constant")
        raise er.SourceLoadError(er.ERR.CE1005, expr.loc, env.filename, name=expr.id)

    def _conversion_target(self, callee: Expr, filename: str) -> Optional[Type]:
        while isinstance(callee, Paren):
            callee = callee.expr
        if isinstance(callee, Name):
            if self.model.const_site(callee.id) is not None:
                return None
            return self.model.lookup_type(callee.id)
        if isinstance(callee, Selector) and isinstance(callee.operand, Name):
            if self.model.is_import(callee.operand.id, filename):
                return NamedType(callee.attr, None, package=callee.operand.id)
        return None

    def _eval_call(self, expr: Call, env: _Env) -> ConstantValue:
        target = self._conversion_target(expr.callee, env.filename)
        if target is not None:
            if len(expr.args) != 1:
                raise self._invalid(expr, env, f"conversion to {target} takes exactly one argument")
            return self._convert(self.evaluate(expr.args[0], env), target, expr, env)

        if isinstance(expr.callee, Name) and expr.callee.id == 'len':
            if len(expr.args) != 1:
                raise self._invalid(expr, env, "len takes exactly one argument")
            arg = self.evaluate(expr.args[0], env)
            if not isinstance(arg.value, bytes):
                raise self._invalid(expr, env, f"invalid argument {arg} for len")
            return ConstantValue(len(arg.value), INT)

        raise self._invalid(expr, env, "function call is not constant")

    def _eval_unary(self, expr: UnaryOp, env: _Env) -> ConstantValue:
        operand = self.evaluate(expr.expr, env)
        v, t = operand.value, operand.type

        if expr.op == '!':
            if not isinstance(v, bool):
                raise self._undefined_op(expr, env, '!', t)
            return ConstantValue(not v, t)

        if isinstance(v, (bool, bytes)):
            raise self._undefined_op(expr, env, expr.op, t)

        if expr.op == '+':
            return operand
        if expr.op == '-':
            return self._represent(ConstantValue(-v, t), t, expr, env)

        # '^': bitwise complement, masked to the width of unsigned types
        if not is_integer(t) and not (is_untyped(t) and _is_integral(v)):
            raise self._undefined_op(expr, env, '^', t)
        ul = underlying(t)
        if ul is not None and not ul.untyped and not ul.signed:
            return ConstantValue(int(v) ^ ((1 << ul.bits) - 1), t)
        return self._represent(ConstantValue(~int(v), t), t, expr, env)

    def _eval_binary(self, expr: BinaryOp, env: _Env) -> ConstantValue:
        left = self.evaluate(expr.left, env)
        right = self.evaluate(expr.right, env)
        op = expr.op

        if op in ('<<', '>>'):
            return self._eval_shift(expr, left, right, env)

        result_type = self._unify(expr, left, right, env)
        left = self._represent(left, result_type, expr.left, env)
        right = self._represent(right, result_type, expr.right, env)
        x, y = left.value, right.value

        if op in ('&&', '||'):
            if not isinstance(x, bool):
                raise self._undefined_op(expr, env, op, result_type)
            return ConstantValue((x and y) if op == '&&' else (x or y), result_type)

        if op in _COMPARISONS:
            if isinstance(x, bool) and op not in ('==', '!='):
                raise self._undefined_op(expr, env, op, result_type)
            outcome = {
                '==': x == y, '!=': x != y, '<': x < y,
                '<=': x <= y, '>': x > y, '>=': x >= y,
            }[op]
            return ConstantValue(outcome, UNTYPED_BOOL)

        if isinstance(x, bool) or (isinstance(x, bytes) and op != '+'):
            raise self._undefined_op(expr, env, op, result_type)

        integral = isinstance(x, int) and isinstance(y, int)
        if op in _INTEGER_ONLY and not integral:
            raise self._undefined_op(expr, env, op, result_type)

        if op == '+':
            value = x + y
        elif op == '-':
            value = x - y
        elif op == '*':
            value = x * y
        elif op in ('/', '%'):
            if y == 0:
                raise er.SourceLoadError(er.ERR.CE1009, expr.loc, env.filename)
            if not integral:
                value = Fraction(x) / Fraction(y)
            else:
                quotient = abs(x) // abs(y)
                if (x < 0) != (y < 0):
                    quotient = -quotient
                value = quotient if op == '/' else x - y * quotient
        elif op == '&':
            value = x & y
        elif op == '|':
            value = x | y
        elif op == '^':
            value = x ^ y
        elif op == '&^':
            value = x & ~y
        else:
            raise self._undefined_op(expr, env, op, result_type)

        return self._represent(ConstantValue(value, result_type), result_type, expr, env)

    def _eval_shift(self, expr: BinaryOp, left: ConstantValue, right: ConstantValue, env: _Env) -> ConstantValue:
        count = right.value
        if isinstance(count, bool) or not _is_integral(count) or (not is_untyped(right.type) and not is_integer(right.type)):
            raise self._invalid(expr, env, f"invalid shift count {right}")
        count = int(count)
        if count < 0:
            raise self._invalid(expr, env, f"invalid negative shift count {right}")
        if count > _MAX_SHIFT:
            raise self._invalid(expr, env, f"shift count {count} too large")

        t = left.type
        v = left.value
        if is_untyped(t) and not isinstance(v, bool) and _is_integral(v):
            t = UNTYPED_INT if t == UNTYPED_FLOAT else t
            v = int(v)
        if isinstance(v, bool) or not isinstance(v, int) or not (is_integer(t) or underlying(t) is None):
            raise self._undefined_op(expr, env, expr.op, t)

        value = v << count if expr.op == '<<' else v >> count
        return self._represent(ConstantValue(value, t), t, expr, env)

    # ------------------------
    # Types and conversions
    # ------------------------

    def _unify(self, expr: BinaryOp, left: ConstantValue, right: ConstantValue, env: _Env) -> Type:
        lt, rt = left.type, right.type
        if not is_untyped(lt) and not is_untyped(rt):
            if lt != rt:
                raise er.SourceLoadError(er.ERR.CE1010, expr.loc, env.filename,
                                         left=str(lt), right=str(rt), op=f"{left} {expr.op} {right}")
            return lt
        if not is_untyped(lt):
            return lt
        if not is_untyped(rt):
            return rt
        numeric = (ValueKind.INTEGRAL, ValueKind.FLOAT)
        if lt.kind != rt.kind and not (lt.kind in numeric and rt.kind in numeric):
            raise er.SourceLoadError(er.ERR.CE1010, expr.loc, env.filename,
                                     left=str(lt), right=str(rt), op=f"{left} {expr.op} {right}")
        return max(lt, rt, key=lambda t: t.rank)

    def _represent(self, cv: ConstantValue, target: Type, node: Expr, env: _Env) -> ConstantValue:
        """Give `cv` the type `target`, the way assignment would.

        Untyped values must be representable by the target; typed values must
        already have it.
        """
        if not is_untyped(cv.type) and cv.type != target:
            raise self._invalid(node, env, f"cannot use {cv} (constant of type {cv.type}) as {target} value")
        ul = underlying(target)
        if ul is None:
            return ConstantValue(cv.value, target)

        v = cv.value
        if ul.kind == ValueKind.BOOL:
            ok = isinstance(v, bool)
        elif ul.kind == ValueKind.TEXT:
            ok = isinstance(v, bytes)
        elif ul.kind == ValueKind.FLOAT:
            ok = not isinstance(v, (bool, bytes))
            if ok and isinstance(v, int):
                v = Fraction(v)
        else:
            ok = not isinstance(v, (bool, bytes))
            if ok:
                if not _is_integral(v):
                    raise self._invalid(node, env, f"constant {cv} truncated to integer")
                v = int(v)
                if not ul.representable(v):
                    raise er.SourceLoadError(er.ERR.CE1008, node.loc, env.filename, value=v, type=str(target))

        if not ok:
            raise self._invalid(node, env, f"cannot use {cv} as {target} value")
        return ConstantValue(v, target)

    def _convert(self, cv: ConstantValue, target: Type, node: Expr, env: _Env) -> ConstantValue:
        """Explicit conversion `target(cv)`."""
        ul = underlying(target)
        v = cv.value
        if ul is None:
            return ConstantValue(v, target)

        if ul.kind == ValueKind.TEXT and isinstance(v, int) and not isinstance(v, bool) and is_integer(cv.type):
            return ConstantValue(_code_point_bytes(v), target)
        if ul.kind in (ValueKind.INTEGRAL, ValueKind.FLOAT) and isinstance(v, (Fraction, int)) and not isinstance(v, bool):
            return self._represent(ConstantValue(v, _untyped_numeric(v)), target, node, env)
        if ul.kind == ValueKind.TEXT and isinstance(v, bytes):
            return ConstantValue(v, target)
        if ul.kind == ValueKind.BOOL and isinstance(v, bool):
            return ConstantValue(v, target)
        raise self._invalid(node, env, f"cannot convert {cv} (constant of type {cv.type}) to type {target}")

    # ------------------------
    # Errors
    # ------------------------

    def _invalid(self, node: Expr, env: _Env, message: str) -> er.SourceLoadError:
        return er.SourceLoadError(er.ERR.CE1007, node.loc, env.filename, message=message)

    def _undefined_op(self, node: Expr, env: _Env, op: str, t: Type) -> er.SourceLoadError:
        return self._invalid(node, env, f"operator {op} not defined on {t}")


def _is_integral(v: Value) -> bool:
    return isinstance(v, int) or (isinstance(v, Fraction) and v.denominator == 1)


def _untyped_numeric(v: Value) -> BasicType:
    return UNTYPED_INT if isinstance(v, int) else UNTYPED_FLOAT


def _code_point_bytes(v: int) -> bytes:
    if 0 <= v <= 0x10FFFF and not 0xD800 <= v < 0xE000:
        return chr(v).encode('utf-8')
    return '\ufffd'.encode('utf-8')


def _dotted(expr: Expr) -> str:
    if isinstance(expr, Selector):
        return f"{_dotted(expr.operand)}.{expr.attr}"
    if isinstance(expr, Name):
        return expr.id
    return type(expr).__name__
