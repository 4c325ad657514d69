# Copyright (c) 2014, Salesforce.com, Inc.  All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions
# are met:
#
# - Redistributions of source code must retain the above copyright
#   notice, this list of conditions and the following disclaimer.
# - Redistributions in binary form must reproduce the above copyright
#   notice, this list of conditions and the following disclaimer in the
#   documentation and/or other materials provided with the distribution.
# - Neither the name of Salesforce.com nor the names of its contributors
#   may be used to endorse or promote products derived from this
#   software without specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS
# "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT
# LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS
# FOR A PARTICULAR PURPOSE ARE DISCLAIMED.  IN NO EVENT SHALL THE
# COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING,
# BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS
# OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND
# ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR
# TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE
# USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.

import numpy
import pytest
from pycrp.rng import RandomSource
from pycrp.slice_sampler import slice_sampler1d, default_step_width
from pycrp.util import ContractViolation
from pycrp.test.util import FixedRandom

SEED = 1234


def normal_logpdf(x):
    return -0.5 * x * x


def run_chain(logpdf, x, sample_count, **kwargs):
    rng = RandomSource(SEED)
    samples = []
    for _ in range(sample_count):
        x = slice_sampler1d(logpdf, x, rng, **kwargs)
        samples.append(x)
    return numpy.array(samples)


def test_default_step_width():
    assert default_step_width(0.5, 0.0, 1.0) == 0.25
    assert default_step_width(8.0, 0.0, numpy.inf) == 2.0
    assert default_step_width(0.0, -numpy.inf, numpy.inf) == 0.1


def test_normal_moments():
    samples = run_chain(
        normal_logpdf,
        0.0,
        4000,
        step_width=1.0,
        max_iterations=1000)
    assert abs(samples.mean()) < 0.15
    assert abs(samples.std() - 1.0) < 0.15


def test_truncated_exponential_mean():
    # Exponential(1) truncated to (0, 1) has mean 1 - 1 / (e - 1)
    samples = run_chain(
        lambda x: -x,
        0.5,
        4000,
        lower=0.0,
        upper=1.0,
        max_iterations=1000)
    assert samples.min() > 0.0
    assert samples.max() < 1.0
    expected = 1.0 - 1.0 / (numpy.e - 1.0)
    assert abs(samples.mean() - expected) < 0.03


def test_never_evaluates_outside_bounds():
    lower, upper = 0.0, 2.0

    def logpdf(x):
        assert lower < x < upper, x
        return -abs(x - 1.0)

    rng = RandomSource(SEED)
    x = 1.0
    for _ in range(200):
        x = slice_sampler1d(logpdf, x, rng, lower, upper, 5.0, 3, 300)
        assert lower < x < upper


def test_evaluation_bound():
    calls = []

    def logpdf(x):
        calls.append(x)
        return normal_logpdf(x)

    rng = RandomSource(SEED)
    slice_sampler1d(logpdf, 0.0, rng, burn_in=100, max_iterations=7)
    assert len(calls) <= 7


def test_initial_value_outside_bounds():
    rng = RandomSource(SEED)
    with pytest.raises(ContractViolation):
        slice_sampler1d(normal_logpdf, 1.0, rng, lower=1.0, upper=2.0)
    with pytest.raises(ContractViolation):
        slice_sampler1d(normal_logpdf, 3.0, rng, lower=1.0, upper=2.0)


def test_reproducible():
    kwargs = {'lower': -5.0, 'upper': 5.0, 'burn_in': 10}
    x1 = slice_sampler1d(normal_logpdf, 0.3, RandomSource(7), **kwargs)
    x2 = slice_sampler1d(normal_logpdf, 0.3, RandomSource(7), **kwargs)
    assert x1 == x2


def test_constant_stream_terminates():
    # every shrinkage proposal lands on the lower bound
    calls = []

    def logpdf(x):
        calls.append(x)
        return -x

    x = slice_sampler1d(
        logpdf,
        0.5,
        FixedRandom(0.0),
        lower=0.0,
        upper=1.0,
        burn_in=5,
        max_iterations=50)
    assert x == 0.5
    assert len(calls) <= 50
    assert all(0.0 < call < 1.0 for call in calls)
