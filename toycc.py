#!/usr/bin/env python3
from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

# ----------------------------
# Errors
# ----------------------------

class CompileError(Exception):
    pass

class LexError(CompileError):
    pass

class ParseError(CompileError):
    pass

class SemanticError(CompileError):
    pass

class CodegenError(CompileError):
    pass

class ResourceExhaustedError(CodegenError):
    pass


# ----------------------------
# Lexer
# ----------------------------

KEYWORDS = {"int", "return", "if", "else", "while", "for"}

TOKEN_SPEC = [
    ("NUM",      r"\d+"),
    ("ID",       r"[A-Za-z_]\w*"),
    ("SYM",      r"==|!=|<=|>=|[+\-*/<>=&,;(){}]"),
    ("SKIP",     r"\s+"),
    ("MISMATCH", r"."),
]

TOKEN_RE = re.compile("|".join(f"(?P<{name}>{pat})" for name, pat in TOKEN_SPEC), re.DOTALL | re.ASCII)

COMMENT_RE = re.compile(r"//[^\n]*|/\*.*?\*/", re.DOTALL)

# literals must fit a signed 64-bit immediate
MAX_LITERAL = 2**63 - 1

@dataclass
class Tok:
    kind: str
    value: object
    pos: int

def lex(src: str) -> List[Tok]:
    # blank out comments so token positions still index the original text
    src = COMMENT_RE.sub(lambda m: re.sub(r"[^\n]", " ", m.group()), src)

    toks: List[Tok] = []
    for m in TOKEN_RE.finditer(src):
        kind = m.lastgroup
        val = m.group()
        pos = m.start()
        if kind == "SKIP":
            continue
        if kind == "ID" and val in KEYWORDS:
            toks.append(Tok("KW", val, pos))
        elif kind == "NUM":
            if int(val) > MAX_LITERAL:
                raise LexError(f"integer literal {val} out of range at {pos}")
            toks.append(Tok("NUM", int(val), pos))
        elif kind == "MISMATCH":
            raise LexError(f"invalid token {val!r} at {pos}")
        else:
            toks.append(Tok(kind, val, pos))
    toks.append(Tok("EOF", "", len(src)))
    return toks


# ----------------------------
# Types
# ----------------------------

PTR_SCALE = 8

class Type:
    pass

@dataclass(frozen=True)
class IntType(Type):
    def __str__(self) -> str:
        return "int"

@dataclass(frozen=True)
class PointerType(Type):
    base: Type

    def __str__(self) -> str:
        return f"{self.base}*"

@dataclass(frozen=True)
class FuncType(Type):
    return_ty: Type
    params: Tuple[Type, ...] = ()

    def __str__(self) -> str:
        return f"{self.return_ty}({', '.join(str(p) for p in self.params)})"

def ty_int() -> Type:
    return IntType()

def pointer_to(base: Type) -> Type:
    return PointerType(base)

def func_type(return_ty: Type, params: List[Type]) -> Type:
    return FuncType(return_ty, tuple(params))

def is_pointer(ty: Type) -> bool:
    return isinstance(ty, PointerType)

def pointee(ty: Type) -> Optional[Type]:
    if isinstance(ty, PointerType):
        return ty.base
    return None


# ----------------------------
# AST
# ----------------------------

class Node: pass

@dataclass
class Num(Node):
    value: int

@dataclass
class UnaryOp(Node):
    op: str          # "+", "-", "&", "*", or "stmt" for an expression statement
    operand: Node

@dataclass
class BinaryOp(Node):
    op: str          # "+", "-", "*", "/", "==", "!=", "<", "<=", "="
    lhs: Node
    rhs: Node

@dataclass
class If(Node):
    cond: Node
    then: Node
    els: Optional[Node] = None

@dataclass
class For(Node):
    init: Optional[Node]
    cond: Optional[Node]
    inc: Optional[Node]
    then: Node

@dataclass
class Block(Node):
    stmts: List[Node]

@dataclass
class Return(Node):
    funcname: str
    expr: Node

@dataclass
class Var(Node):
    name: str
    ty: Type
    offset: int

@dataclass
class Funcall(Node):
    name: str
    args: List[Node]

@dataclass
class Funcdef(Node):
    name: str
    body: Block
    params: List[Var]
    locals: List[Var]
    stack_size: int
    return_ty: Type = field(default_factory=ty_int)

    @property
    def param_types(self) -> List[Type]:
        return [p.ty for p in self.params]

    @property
    def ty(self) -> Type:
        return func_type(self.return_ty, self.param_types)

@dataclass
class Program:
    funcs: List[Funcdef]

def type_of(node: Node) -> Type:
    """Static type of an expression node."""
    if isinstance(node, Var):
        return node.ty
    if isinstance(node, UnaryOp):
        if node.op == "&":
            return pointer_to(type_of(node.operand))
        if node.op == "*":
            base = pointee(type_of(node.operand))
            return base if base is not None else ty_int()
        return type_of(node.operand)
    if isinstance(node, BinaryOp) and node.op in ("+", "-", "="):
        return type_of(node.lhs)
    return ty_int()

def is_lvalue(node: Node) -> bool:
    return isinstance(node, Var) or (isinstance(node, UnaryOp) and node.op == "*")


# ----------------------------
# Parser (recursive descent)
# ----------------------------

CALLEE_SAVED_AREA = 32
MAX_PARAMS = 6

def align_to(n: int, align: int) -> int:
    return (n + align - 1) // align * align

@dataclass
class LVar:
    name: str
    ty: Type
    offset: int

class Parser:
    def __init__(self, toks: List[Tok]):
        self.toks = toks
        self.i = 0
        # per-function state, reset by enter_function()
        self.locals: List[LVar] = []
        self.offset = CALLEE_SAVED_AREA
        self.funcname = ""
        self.func_names: set = set()

    def cur(self) -> Tok:
        return self.toks[self.i]

    def peek(self, n: int = 1) -> Tok:
        return self.toks[min(self.i + n, len(self.toks) - 1)]

    def eat(self, kind: str, value: Optional[str] = None) -> Tok:
        t = self.cur()
        if t.kind != kind or (value is not None and t.value != value):
            want = repr(value) if value is not None else kind
            got = repr(t.value) if t.kind != "EOF" else "end of input"
            raise ParseError(f"expected {want}, got {got} at {t.pos}")
        self.i += 1
        return t

    def match(self, kind: str, value: Optional[str] = None) -> bool:
        t = self.cur()
        if t.kind != kind:
            return False
        if value is not None and t.value != value:
            return False
        return True

    def consume(self, kind: str, value: Optional[str] = None) -> bool:
        if self.match(kind, value):
            self.i += 1
            return True
        return False

    # ---------- locals ----------

    def check_func_name(self, name: str, pos: int) -> None:
        if name.lower() in ASM_RESERVED:
            raise SemanticError(f"function name '{name}' is reserved by the assembler at {pos}")

    def enter_function(self, name: str, pos: int) -> None:
        self.check_func_name(name, pos)
        if name in self.func_names:
            raise SemanticError(f"redefinition of function '{name}' at {pos}")
        self.func_names.add(name)
        self.locals = []
        self.offset = CALLEE_SAVED_AREA
        self.funcname = name

    def find_var(self, name: str) -> Optional[LVar]:
        for lv in self.locals:
            if lv.name == name:
                return lv
        return None

    def declare(self, tok: Tok, ty: Type) -> Var:
        if self.find_var(tok.value) is not None:
            raise SemanticError(f"redefinition of '{tok.value}' at {tok.pos}")
        self.offset += 8
        lv = LVar(tok.value, ty, self.offset)
        self.locals.append(lv)
        return Var(lv.name, lv.ty, lv.offset)

    def local_vars(self) -> List[Var]:
        return [Var(lv.name, lv.ty, lv.offset) for lv in self.locals]

    # ---------- declarations ----------

    def parse_program(self) -> Program:
        funcs: List[Funcdef] = []
        while not self.match("EOF"):
            if self.match("SYM", "{"):
                funcs.append(self.parse_bare_main())
            else:
                funcs.append(self.parse_funcdef())
        return Program(funcs)

    def parse_bare_main(self) -> Funcdef:
        """A top-level '{ ... }' is shorthand for 'int main() { ... }'."""
        self.enter_function("main", self.cur().pos)
        self.eat("SYM", "{")
        body = self.compound_stmt()
        return Funcdef("main", body, [], self.local_vars(), align_to(self.offset, 16))

    def parse_funcdef(self) -> Funcdef:
        ret_ty = self.typespec()
        ret_ty, name_tok = self.declarator(ret_ty)
        self.enter_function(name_tok.value, name_tok.pos)

        self.eat("SYM", "(")
        params: List[Var] = []
        if not self.match("SYM", ")"):
            while True:
                pty = self.typespec()
                pty, ptok = self.declarator(pty)
                if len(params) == MAX_PARAMS:
                    raise SemanticError(
                        f"'{name_tok.value}' has more than {MAX_PARAMS} parameters at {ptok.pos}")
                params.append(self.declare(ptok, pty))
                if not self.consume("SYM", ","):
                    break
        self.eat("SYM", ")")

        self.eat("SYM", "{")
        body = self.compound_stmt()
        return Funcdef(name_tok.value, body, params, self.local_vars(),
                       align_to(self.offset, 16), ret_ty)

    def typespec(self) -> Type:
        self.eat("KW", "int")
        return ty_int()

    def declarator(self, ty: Type) -> Tuple[Type, Tok]:
        while self.consume("SYM", "*"):
            ty = pointer_to(ty)
        return ty, self.eat("ID")

    def declaration(self) -> Block:
        basety = self.typespec()
        stmts: List[Node] = []
        first = True
        while not self.match("SYM", ";"):
            if not first:
                self.eat("SYM", ",")
            first = False
            ty, tok = self.declarator(basety)
            var = self.declare(tok, ty)
            if self.consume("SYM", "="):
                stmts.append(UnaryOp("stmt", BinaryOp("=", var, self.assign())))
        self.eat("SYM", ";")
        return Block(stmts)

    # ---------- statements ----------

    def compound_stmt(self) -> Block:
        stmts: List[Node] = []
        while not self.match("SYM", "}"):
            if self.match("KW", "int"):
                stmts.append(self.declaration())
            else:
                stmts.append(self.stmt())
        self.eat("SYM", "}")
        return Block(stmts)

    def stmt(self) -> Node:
        if self.consume("KW", "return"):
            e = self.expr()
            self.eat("SYM", ";")
            return Return(self.funcname, e)

        if self.consume("KW", "if"):
            self.eat("SYM", "(")
            cond = self.expr()
            self.eat("SYM", ")")
            then = self.stmt()
            els = None
            if self.consume("KW", "else"):
                els = self.stmt()
            return If(cond, then, els)

        if self.consume("KW", "for"):
            self.eat("SYM", "(")
            init = None
            if not self.match("SYM", ";"):
                init = UnaryOp("stmt", self.expr())
            self.eat("SYM", ";")

            cond = None
            if not self.match("SYM", ";"):
                cond = self.expr()
            self.eat("SYM", ";")

            inc = None
            if not self.match("SYM", ")"):
                inc = UnaryOp("stmt", self.expr())
            self.eat("SYM", ")")
            return For(init, cond, inc, self.stmt())

        if self.consume("KW", "while"):
            self.eat("SYM", "(")
            cond = self.expr()
            self.eat("SYM", ")")
            return For(None, cond, None, self.stmt())

        if self.consume("SYM", "{"):
            return self.compound_stmt()

        e = self.expr()
        self.eat("SYM", ";")
        return UnaryOp("stmt", e)

    # ---------- expressions ----------

    def expr(self) -> Node:
        return self.assign()

    def assign(self) -> Node:
        node = self.equality()
        t = self.cur()
        if self.consume("SYM", "="):
            if not is_lvalue(node):
                raise SemanticError(f"cannot assign to a non-lvalue at {t.pos}")
            node = BinaryOp("=", node, self.assign())
        return node

    def equality(self) -> Node:
        node = self.relational()
        while True:
            if self.consume("SYM", "=="):
                node = BinaryOp("==", node, self.relational())
            elif self.consume("SYM", "!="):
                node = BinaryOp("!=", node, self.relational())
            else:
                return node

    def relational(self) -> Node:
        node = self.add()
        while True:
            if self.consume("SYM", "<"):
                node = BinaryOp("<", node, self.add())
            elif self.consume("SYM", "<="):
                node = BinaryOp("<=", node, self.add())
            elif self.consume("SYM", ">"):
                node = BinaryOp("<", self.add(), node)
            elif self.consume("SYM", ">="):
                node = BinaryOp("<=", self.add(), node)
            else:
                return node

    def add(self) -> Node:
        node = self.mul()
        while True:
            t = self.cur()
            if self.consume("SYM", "+"):
                node = self.new_add(node, self.mul(), t)
            elif self.consume("SYM", "-"):
                node = self.new_sub(node, self.mul(), t)
            else:
                return node

    def new_add(self, lhs: Node, rhs: Node, t: Tok) -> Node:
        lty, rty = type_of(lhs), type_of(rhs)
        if not is_pointer(lty) and not is_pointer(rty):
            return BinaryOp("+", lhs, rhs)
        if is_pointer(lty) and is_pointer(rty):
            raise SemanticError(f"invalid operands to '+' ({lty} and {rty}) at {t.pos}")
        # canonicalize `num + ptr` to `ptr + num`
        if not is_pointer(lty):
            lhs, rhs = rhs, lhs
        return BinaryOp("+", lhs, BinaryOp("*", rhs, Num(PTR_SCALE)))

    def new_sub(self, lhs: Node, rhs: Node, t: Tok) -> Node:
        lty, rty = type_of(lhs), type_of(rhs)
        if not is_pointer(lty) and not is_pointer(rty):
            return BinaryOp("-", lhs, rhs)
        if is_pointer(lty) and not is_pointer(rty):
            return BinaryOp("-", lhs, BinaryOp("*", rhs, Num(PTR_SCALE)))
        if not is_pointer(lty):
            raise SemanticError(f"invalid operands to '-' ({lty} and {rty}) at {t.pos}")
        # ptr - ptr is an element count, possibly negative
        return BinaryOp("/", BinaryOp("-", lhs, rhs), Num(PTR_SCALE))

    def mul(self) -> Node:
        node = self.unary()
        while True:
            if self.consume("SYM", "*"):
                node = BinaryOp("*", node, self.unary())
            elif self.consume("SYM", "/"):
                node = BinaryOp("/", node, self.unary())
            else:
                return node

    def unary(self) -> Node:
        t = self.cur()
        if self.consume("SYM", "+"):
            return UnaryOp("+", self.unary())
        if self.consume("SYM", "-"):
            return UnaryOp("-", self.unary())
        if self.consume("SYM", "&"):
            operand = self.unary()
            if not is_lvalue(operand):
                raise SemanticError(f"cannot take the address of a non-lvalue at {t.pos}")
            return UnaryOp("&", operand)
        if self.consume("SYM", "*"):
            return UnaryOp("*", self.unary())
        return self.primary()

    def primary(self) -> Node:
        t = self.cur()
        if self.consume("SYM", "("):
            node = self.expr()
            self.eat("SYM", ")")
            return node

        if t.kind == "ID":
            if self.peek().kind == "SYM" and self.peek().value == "(":
                return self.funcall()
            self.eat("ID")
            lv = self.find_var(t.value)
            if lv is None:
                raise SemanticError(f"undefined variable '{t.value}' at {t.pos}")
            return Var(lv.name, lv.ty, lv.offset)

        if t.kind == "NUM":
            self.eat("NUM")
            return Num(t.value)

        got = repr(t.value) if t.kind != "EOF" else "end of input"
        raise ParseError(f"expected an expression, got {got} at {t.pos}")

    def funcall(self) -> Funcall:
        t = self.eat("ID")
        self.check_func_name(t.value, t.pos)
        name = t.value
        self.eat("SYM", "(")
        args: List[Node] = []
        if not self.match("SYM", ")"):
            while True:
                args.append(self.assign())
                if not self.consume("SYM", ","):
                    break
        self.eat("SYM", ")")
        return Funcall(name, args)


# ----------------------------
# Codegen (x86-64, Intel syntax)
# ----------------------------

REGS = ["r10", "r11", "r12", "r13", "r14", "r15"]
ARGREGS = ["rdi", "rsi", "rdx", "rcx", "r8", "r9"]

# Names GAS reads as registers or operand keywords in Intel noprefix syntax.
# A function with one of these names would make `call name` mean something else.
ASM_RESERVED = {
    "rax", "rbx", "rcx", "rdx", "rsi", "rdi", "rsp", "rbp", "rip",
    "eax", "ebx", "ecx", "edx", "esi", "edi", "esp", "ebp", "eip",
    "ax", "bx", "cx", "dx", "si", "di", "sp", "bp", "ip",
    "al", "bl", "cl", "dl", "ah", "bh", "ch", "dh", "sil", "dil", "spl", "bpl",
    "cs", "ds", "es", "fs", "gs", "ss", "st",
    "byte", "word", "dword", "fword", "qword", "tbyte", "oword",
    "mmword", "xmmword", "ymmword", "zmmword",
    "ptr", "offset", "flat", "short", "near", "far",
    "not", "and", "or", "xor", "mod", "shl", "shr",
    "eq", "ne", "lt", "le", "gt", "ge",
}
for _n in range(8, 16):
    ASM_RESERVED.update({f"r{_n}", f"r{_n}d", f"r{_n}w", f"r{_n}b", f"r{_n}l"})
for _n in range(32):
    ASM_RESERVED.update({f"xmm{_n}", f"ymm{_n}", f"zmm{_n}"})
for _n in range(16):
    ASM_RESERVED.update({f"cr{_n}", f"dr{_n}"})
for _n in range(8):
    ASM_RESERVED.update({f"mm{_n}", f"st{_n}", f"k{_n}"})

# scratch registers the callee must preserve; spilled to [rbp-8]..[rbp-32]
CALLEE_SAVED = ["r12", "r13", "r14", "r15"]

SETCC = {"==": "sete", "!=": "setne", "<": "setl", "<=": "setle"}

class Codegen:
    def __init__(self, prog: Program):
        self.prog = prog
        self.lines: List[str] = []
        self.depth = 0       # number of live scratch registers
        self.label_seq = 0

    def emit(self, s: str) -> None:
        self.lines.append(s)

    def new_seq(self) -> int:
        self.label_seq += 1
        return self.label_seq

    # ---------- scratch register stack ----------

    def push(self) -> str:
        if self.depth >= len(REGS):
            raise ResourceExhaustedError(
                f"expression needs more than {len(REGS)} scratch registers")
        reg = REGS[self.depth]
        self.depth += 1
        return reg

    def pop(self) -> str:
        if self.depth <= 0:
            raise CodegenError("scratch register stack underflow")
        self.depth -= 1
        return REGS[self.depth]

    def top(self) -> str:
        if self.depth <= 0:
            raise CodegenError("scratch register stack is empty")
        return REGS[self.depth - 1]

    def load(self) -> None:
        reg = self.top()
        self.emit(f"  mov {reg}, [{reg}]")

    def store(self) -> None:
        addr = self.pop()
        self.emit(f"  mov [{addr}], {self.top()}")

    # ---------- expressions ----------

    def gen_addr(self, node: Node) -> None:
        """Push the address of an lvalue."""
        if isinstance(node, Var):
            self.emit(f"  lea {self.push()}, [rbp-{node.offset}]")
            return
        if isinstance(node, UnaryOp) and node.op == "*":
            self.gen_expr(node.operand)
            return
        raise CodegenError(f"not an lvalue: {type(node).__name__}")

    def gen_expr(self, node: Node) -> None:
        """Push the value of an expression."""
        if isinstance(node, Num):
            self.emit(f"  mov {self.push()}, {node.value}")
            return

        if isinstance(node, Var):
            self.gen_addr(node)
            self.load()
            return

        if isinstance(node, UnaryOp):
            if node.op == "&":
                self.gen_addr(node.operand)
            elif node.op == "*":
                self.gen_expr(node.operand)
                self.load()
            elif node.op == "+":
                self.gen_expr(node.operand)
            elif node.op == "-":
                self.gen_expr(node.operand)
                self.emit(f"  neg {self.top()}")
            else:
                raise CodegenError(f"unsupported unary operator {node.op!r}")
            return

        if isinstance(node, BinaryOp):
            if node.op == "=":
                self.gen_expr(node.rhs)
                self.gen_addr(node.lhs)
                self.store()
                return
            self.gen_binary(node)
            return

        if isinstance(node, Funcall):
            self.gen_funcall(node)
            return

        raise CodegenError(f"unsupported expression node: {type(node).__name__}")

    def gen_binary(self, node: BinaryOp) -> None:
        self.gen_expr(node.lhs)
        self.gen_expr(node.rhs)
        rs = self.pop()
        rd = self.top()

        op = node.op
        if op == "+":
            self.emit(f"  add {rd}, {rs}")
        elif op == "-":
            self.emit(f"  sub {rd}, {rs}")
        elif op == "*":
            self.emit(f"  imul {rd}, {rs}")
        elif op == "/":
            self.emit(f"  mov rax, {rd}")
            self.emit("  cqo")
            self.emit(f"  idiv {rs}")
            self.emit(f"  mov {rd}, rax")
        elif op in SETCC:
            self.emit(f"  cmp {rd}, {rs}")
            self.emit(f"  {SETCC[op]} al")
            self.emit(f"  movzx {rd}, al")
        else:
            raise CodegenError(f"unsupported binary operator {op!r}")

    def gen_funcall(self, node: Funcall) -> None:
        if len(node.args) > len(ARGREGS):
            raise CodegenError(f"call to '{node.name}' supports up to {len(ARGREGS)} arguments")

        for arg in node.args:
            self.gen_expr(arg)
        # last argument is on top of the stack
        for i in reversed(range(len(node.args))):
            self.emit(f"  mov {ARGREGS[i]}, {self.pop()}")

        # r10/r11 are caller-saved; r12-r15 are preserved by the callee
        self.emit("  push r10")
        self.emit("  push r11")
        self.emit("  mov rax, 0")
        self.emit(f"  call {node.name}")
        self.emit("  pop r11")
        self.emit("  pop r10")
        self.emit(f"  mov {self.push()}, rax")

    # ---------- statements ----------

    def gen_stmt(self, node: Node) -> None:
        self._gen_stmt(node)
        if self.depth != 0:
            raise CodegenError(f"{self.depth} scratch registers still live after statement")

    def _gen_stmt(self, node: Node) -> None:
        if isinstance(node, UnaryOp) and node.op == "stmt":
            self.gen_expr(node.operand)
            self.pop()
            return

        if isinstance(node, Return):
            self.gen_expr(node.expr)
            self.emit(f"  mov rax, {self.pop()}")
            self.emit(f"  jmp .L.return.{node.funcname}")
            return

        if isinstance(node, Block):
            for st in node.stmts:
                self.gen_stmt(st)
            return

        if isinstance(node, If):
            seq = self.new_seq()
            self.gen_expr(node.cond)
            self.emit(f"  cmp {self.pop()}, 0")
            if node.els is None:
                self.emit(f"  je .L.end.{seq}")
                self.gen_stmt(node.then)
            else:
                self.emit(f"  je .L.else.{seq}")
                self.gen_stmt(node.then)
                self.emit(f"  jmp .L.end.{seq}")
                self.emit(f".L.else.{seq}:")
                self.gen_stmt(node.els)
            self.emit(f".L.end.{seq}:")
            return

        if isinstance(node, For):
            seq = self.new_seq()
            if node.init is not None:
                self.gen_stmt(node.init)
            self.emit(f".L.begin.{seq}:")
            if node.cond is not None:
                self.gen_expr(node.cond)
                self.emit(f"  cmp {self.pop()}, 0")
                self.emit(f"  je .L.end.{seq}")
            self.gen_stmt(node.then)
            if node.inc is not None:
                self.gen_stmt(node.inc)
            self.emit(f"  jmp .L.begin.{seq}")
            self.emit(f".L.end.{seq}:")
            return

        raise CodegenError(f"unsupported statement node: {type(node).__name__}")

    # ---------- functions ----------

    def gen_func(self, f: Funcdef) -> None:
        if len(f.params) > len(ARGREGS):
            raise CodegenError(f"'{f.name}' has more than {len(ARGREGS)} parameters")
        self.depth = 0

        self.emit(f".globl {f.name}")
        self.emit(f"{f.name}:")

        # Prologue
        self.emit("  push rbp")
        self.emit("  mov rbp, rsp")
        self.emit(f"  sub rsp, {f.stack_size}")
        for i, reg in enumerate(CALLEE_SAVED):
            self.emit(f"  mov [rbp-{(i + 1) * 8}], {reg}")

        for reg, p in zip(ARGREGS, f.params):
            self.emit(f"  mov [rbp-{p.offset}], {reg}")
        params = {p.name for p in f.params}
        for v in f.locals:
            if v.name not in params:
                self.emit(f"  mov qword ptr [rbp-{v.offset}], 0")

        self.gen_stmt(f.body)
        self.emit("  mov rax, 0")

        # Epilogue
        self.emit(f".L.return.{f.name}:")
        for i, reg in enumerate(CALLEE_SAVED):
            self.emit(f"  mov {reg}, [rbp-{(i + 1) * 8}]")
        self.emit("  mov rsp, rbp")
        self.emit("  pop rbp")
        self.emit("  ret")

    def gen(self) -> str:
        self.emit(".intel_syntax noprefix")
        for f in self.prog.funcs:
            self.gen_func(f)
        return "\n".join(self.lines) + "\n"


# ----------------------------
# Driver
# ----------------------------

HELP = """\
Usage:
  toycc [-o output.s] '<program source>'
"""

def compile_source(src: str) -> str:
    """Compile program text to an x86-64 assembly listing."""
    toks = lex(src)
    prog = Parser(toks).parse_program()
    return Codegen(prog).gen()

def main(argv: Optional[List[str]] = None) -> int:
    import getopt
    if argv is None:
        argv = sys.argv
    try:
        opts, args = getopt.getopt(argv[1:], "o:")
    except getopt.GetoptError as e:
        print(f"toycc: {e}", file=sys.stderr)
        print(HELP, file=sys.stderr, end="")
        return 1

    out_path = None
    for flag, val in opts:
        if flag == "-o":
            out_path = val

    if len(args) != 1:
        print("toycc: invalid number of arguments", file=sys.stderr)
        print(HELP, file=sys.stderr, end="")
        return 1

    try:
        asm = compile_source(args[0])
    except CompileError as e:
        print(f"toycc: {e}", file=sys.stderr)
        return 1

    if out_path is None:
        sys.stdout.write(asm)
    else:
        Path(out_path).write_text(asm, encoding="utf-8")
    return 0

if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
