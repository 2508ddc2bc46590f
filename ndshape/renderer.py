from __future__ import annotations
from ndshape.dtype import DType

# Unsigned results are masked inline, signed ones go through dtype.wrap to restore the sign
def render_wrap(expr:str, dtype:DType) -> str: return f"wrap({expr})" if dtype.signed else f"({expr}) & {hex(dtype.mask)}"
def render_const(x:int, dtype:DType) -> str: return str(x) if dtype.signed else hex(x)
def render_coords(n:int) -> list[str]: return [f"x{k}" for k in range(n)]
def append_indent(lines:list[str]) -> str: return "\n".join(f"  {line}" for line in lines)
def render_function(name:str, arg:str, body:list[str]) -> str: return f"def {name}({arg}):\n{append_indent(body)}\n"

def render_linearize(strides:tuple[int, ...], dtype:DType) -> str:
  coords = render_coords(len(strides))
  terms = [x if s == 1 else f"{s}*{x}" for x, s in zip(coords, strides) if s != 0]
  return render_function("linearize", "p", [
    f"{', '.join(coords)}, = p",
    f"return {render_wrap(' + '.join(terms) or '0', dtype)}",
  ])

def render_delinearize(strides:tuple[int, ...], dtype:DType) -> str:
  coords = render_coords(len(strides))
  body = [f"i = {render_wrap('i', dtype)}"]
  if len(strides) < 2: return render_function("delinearize", "i", body + ["return (i,)"])
  # Highest axis first, each quotient is taken from what the axes above left over
  for x, s in zip(reversed(coords[2:]), reversed(strides[2:])):
    if s == 0: body.append(f"{x} = 0")
    elif dtype.signed: body += [f"{x} = wrap(cdiv(i, {s}))", f"i = wrap(i - {x}*{s})"]
    else: body.append(f"{x}, i = divmod(i, {s})")
  # Axis 0 is the remainder modulo the stride of axis 1
  s = strides[1]
  if s == 0: body += ["x1 = 0", "x0 = i"]
  elif dtype.signed: body += [f"x1 = wrap(cdiv(i, {s}))", f"x0 = wrap(cmod(i, {s}))"]
  else: body.append(f"x1, x0 = divmod(i, {s})")
  return render_function("delinearize", "i", body + [f"return ({', '.join(coords)},)"])

def render_pow2_linearize(shifts:tuple[int, ...], dtype:DType) -> str:
  coords = render_coords(len(shifts))
  terms = [x if s == 0 else f"({x} << {s})" for x, s in zip(coords, shifts)]
  return render_function("linearize", "p", [
    f"{', '.join(coords)}, = p",
    f"return {render_wrap(' | '.join(terms), dtype)}",
  ])

def render_pow2_delinearize(shifts:tuple[int, ...], masks:tuple[int, ...], dtype:DType) -> str:
  terms = [f"i & {render_const(m, dtype)}" if s == 0 else f"(i & {render_const(m, dtype)}) >> {s}" for s, m in zip(shifts, masks)]
  return render_function("delinearize", "i", [
    f"i = {render_wrap('i', dtype)}",
    f"return ({', '.join(terms)},)",
  ])
