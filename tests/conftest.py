"""Shared bindgen output samples.

The samples mirror what bindgen emits for aya_bpf_bindings.h: constants and
structs at the top level, and the helpers as ``Option<fn>`` statics inside
``extern "C"`` blocks.
"""

from __future__ import annotations

import pytest

from bpfgen.parser import BindingsTree, parse_bindings

MAP_LOOKUP_ELEM = (
    "    pub static bpf_map_lookup_elem: ::core::option::Option<"
    'unsafe extern "C" fn(arg0: *mut ::aya_bpf_cty::c_void, arg1: *const ::aya_bpf_cty::c_void)'
    " -> *mut ::aya_bpf_cty::c_void>;\n"
)

LOOKUP_SOURCE = 'pub const BPF_SOME_CONST: u32 = 1;\nextern "C" {\n' + MAP_LOOKUP_ELEM + "}\n"

INTERLEAVED_SOURCE = """\
pub const BPF_ANY: u32 = 0;
extern "C" {
    pub static bpf_ktime_get_ns: ::core::option::Option<unsafe extern "C" fn() -> u64>;
    pub static bpf_counter: u32;
    pub fn bpf_not_a_helper(x: u32) -> u32;
    pub static BPF_FLAG: u32;
    pub static bpf_get_prandom_u32: ::core::option::Option<unsafe extern "C" fn() -> u32>;
}
#[repr(C)]
#[derive(Debug, Copy, Clone)]
pub struct bpf_map_def {
    pub type_: ::aya_bpf_cty::c_uint,
    pub key_size: ::aya_bpf_cty::c_uint,
}
extern "C" {
    pub static bpf_map_update_elem: ::core::option::Option<unsafe extern "C" fn(map: *mut ::aya_bpf_cty::c_void, key: *const ::aya_bpf_cty::c_void, value: *const ::aya_bpf_cty::c_void, flags: u64) -> ::aya_bpf_cty::c_long>;
}
"""

PRINTK_SOURCE = """\
extern "C" {
    pub static bpf_trace_printk: ::core::option::Option<unsafe extern "C" fn(fmt: *const ::aya_bpf_cty::c_char, fmt_size: u32, ...) -> ::aya_bpf_cty::c_long>;
    pub static bpf_get_smp_processor_id: ::core::option::Option<unsafe extern "C" fn() -> u32>;
}
"""


@pytest.fixture()
def lookup_tree() -> BindingsTree:
    return parse_bindings(LOOKUP_SOURCE)


@pytest.fixture()
def interleaved_tree() -> BindingsTree:
    return parse_bindings(INTERLEAVED_SOURCE)


@pytest.fixture()
def printk_tree() -> BindingsTree:
    return parse_bindings(PRINTK_SOURCE)


@pytest.fixture()
def lookup_source() -> str:
    return LOOKUP_SOURCE


@pytest.fixture()
def interleaved_source() -> str:
    return INTERLEAVED_SOURCE
