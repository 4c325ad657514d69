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
'''
Univariate slice sampling with stepping out and shrinkage,
following Neal (2003) "Slice sampling", Annals of Statistics 31(3).
'''

import numpy
from pycrp.util import LOG, ContractViolation

INF = float('inf')


def default_step_width(x, lower, upper):
    if numpy.isfinite(lower) and numpy.isfinite(upper):
        return (upper - lower) / 4.0
    else:
        return max(abs(x) / 4.0, 0.1)


def slice_sampler1d(
        logpdf,
        x,
        rng,
        lower=-INF,
        upper=INF,
        step_width=0.0,
        burn_in=1,
        max_iterations=100):
    '''
    Run burn_in slice-sampling updates of x under logpdf restricted to the
    open interval (lower, upper), and return the final state.

    logpdf is never evaluated outside (lower, upper). Sampling stops early
    once max_iterations evaluations and shrinkage proposals have been made,
    counting proposals that fall on a bound.
    '''
    if not lower < x < upper:
        raise ContractViolation(
            'initial value {} outside ({}, {})'.format(x, lower, upper))
    if step_width <= 0:
        step_width = default_step_width(x, lower, upper)

    log_fx = logpdf(x)
    iterations = 1
    for _ in range(burn_in):
        # rng.random() is in [0, 1), so the slice height is finite
        log_y = log_fx + numpy.log(1.0 - rng.random())

        left = x - step_width * rng.random()
        right = left + step_width
        while left > lower and iterations < max_iterations:
            iterations += 1
            if logpdf(left) < log_y:
                break
            left -= step_width
        while right < upper and iterations < max_iterations:
            iterations += 1
            if logpdf(right) < log_y:
                break
            right += step_width
        left = max(left, lower)
        right = min(right, upper)

        while True:
            if iterations >= max_iterations:
                LOG('slice sampler stopped after {} iterations'.format(
                    iterations))
                return float(x)
            x1 = left + rng.random() * (right - left)
            iterations += 1
            if lower < x1 < upper:
                log_fx1 = logpdf(x1)
                if log_fx1 >= log_y:
                    x = x1
                    log_fx = log_fx1
                    break
            if x1 < x:
                left = x1
            else:
                right = x1

    return float(x)
