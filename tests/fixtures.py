import pytest

import tinyisa.isa.registers as regs

import unit_utils


@pytest.fixture
def all_instructions():
    yield unit_utils.representatives()


@pytest.fixture(params=regs.ALL, ids=str)
def register(request):
    yield request.param
