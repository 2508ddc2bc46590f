import builtins, time
from typing import Callable
from ndshape.helpers import DEBUG

def compile(source:str, names:tuple[str, ...], namespace:dict, filename:str) -> tuple[Callable, ...]:
  if DEBUG:
    print(f"\n{filename}\n{source}" if DEBUG >= 2 else filename)
    compile_timer = time.perf_counter()
  exec(builtins.compile(source, filename, "exec"), namespace)
  if DEBUG:
    print(f"Shape compile\t{(time.perf_counter() - compile_timer) * 1000:.3f}ms")
  return tuple(namespace[name] for name in names)
