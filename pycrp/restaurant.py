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
Pitman-Yor Chinese restaurant process with histogram-based table tracking,
after Blunsom et al. (2009) "A note on the implementation of hierarchical
Dirichlet processes".

Observation likelihoods are assumed to be 1 when a customer's dish matches
the value drawn from the base distribution and 0 otherwise, as is usual for
discrete NLP models. This does not hold for PYP mixture models.
'''

import sys
from collections import namedtuple
from copy import deepcopy
import numpy
from scipy.special import gammaln
import pycrp.config
from pycrp.density import log_beta_density, log_gamma_density
from pycrp.histogram import TableHistogram
from pycrp.slice_sampler import slice_sampler1d
from pycrp.util import LOG, ContractViolation

TINY = sys.float_info.min
INF = float('inf')

BetaPrior = namedtuple('BetaPrior', ['alpha', 'beta'])
GammaPrior = namedtuple('GammaPrior', ['shape', 'rate'])


def check_hyperparameters(discount, strength):
    if not 0.0 <= discount < 1.0:
        raise ContractViolation('Bad discount: {}'.format(discount))
    if not strength > -discount:
        raise ContractViolation('Bad strength: {} (discount={})'.format(
            strength,
            discount))


def check_prior(prior):
    if prior is None:
        return
    if not all(param is not None and param > 0 for param in prior):
        raise ContractViolation('Bad prior: {}'.format(prior))


class Restaurant(object):
    '''
    Seating arrangement of a Pitman-Yor process with discount d in [0, 1)
    and strength c > -d.

    Dishes may be any hashable value. A dish is present exactly while it has
    at least one seated customer.

    Optional hyperpriors: discount ~ Beta(alpha, beta) and
    strength + discount ~ Gamma(shape, rate); either may be None.
    '''
    def __init__(
            self,
            discount,
            strength,
            discount_prior=None,
            strength_prior=None):
        self._dishes = {}
        self._tables = 0
        self._customers = 0
        self._discount = float(discount)
        self._strength = float(strength)
        check_prior(discount_prior)
        check_prior(strength_prior)
        self.discount_prior = discount_prior
        self.strength_prior = strength_prior
        self.check_hyperparameters()

    @classmethod
    def with_priors(
            cls,
            discount_alpha,
            discount_beta,
            strength_shape,
            strength_rate,
            discount=0.8,
            strength=1.0):
        discount_prior = None
        if discount_alpha is not None or discount_beta is not None:
            discount_prior = BetaPrior(discount_alpha, discount_beta)
        strength_prior = None
        if strength_shape is not None or strength_rate is not None:
            strength_prior = GammaPrior(strength_shape, strength_rate)
        return cls(discount, strength, discount_prior, strength_prior)

    @classmethod
    def from_config(cls, config):
        config = deepcopy(config)
        pycrp.config.fill_in_defaults(config)
        prior = config['prior']
        discount_prior = None
        if prior['discount'] is not None:
            discount_prior = BetaPrior(**prior['discount'])
        strength_prior = None
        if prior['strength'] is not None:
            strength_prior = GammaPrior(**prior['strength'])
        return cls(
            config['restaurant']['discount'],
            config['restaurant']['strength'],
            discount_prior,
            strength_prior)

    def check_hyperparameters(self):
        check_hyperparameters(self._discount, self._strength)

    @property
    def discount(self):
        return self._discount

    @property
    def strength(self):
        return self._strength

    def set_hyperparameters(self, discount, strength):
        check_hyperparameters(discount, strength)
        self._discount = float(discount)
        self._strength = float(strength)

    def set_discount(self, discount):
        self.set_hyperparameters(discount, self._strength)

    def set_strength(self, strength):
        self.set_hyperparameters(self._discount, strength)

    def has_discount_prior(self):
        return self.discount_prior is not None

    def has_strength_prior(self):
        return self.strength_prior is not None

    def clear(self):
        self._tables = 0
        self._customers = 0
        self._dishes.clear()

    def num_tables(self, dish=None):
        if dish is None:
            return self._tables
        histogram = self._dishes.get(dish)
        return 0 if histogram is None else histogram.num_tables()

    def num_customers(self, dish=None):
        if dish is None:
            return self._customers
        histogram = self._dishes.get(dish)
        return 0 if histogram is None else histogram.num_customers()

    def __iter__(self):
        return iter(self._dishes.items())

    def __len__(self):
        return len(self._dishes)

    def __contains__(self, dish):
        return dish in self._dishes

    def swap(self, other):
        if not isinstance(other, Restaurant):
            raise ContractViolation('Cannot swap with {!r}'.format(other))
        self.__dict__, other.__dict__ = other.__dict__, self.__dict__

    def increment(self, dish, p0, rng):
        '''
        Seat a customer eating dish, given base probability p0 of the dish.
        Returns 1 if a new table was opened, otherwise 0.
        '''
        if not p0 >= 0:
            raise ContractViolation('Bad base probability: {}'.format(p0))
        histogram = self._dishes.get(dish)
        if histogram is None:
            histogram = self._dishes[dish] = TableHistogram()
        share_table = False
        if histogram.num_customers():
            p_empty = (self._strength + self._tables * self._discount) * p0
            p_share = (
                histogram.num_customers() -
                histogram.num_tables() * self._discount)
            share_table = rng.bernoulli(p_empty, p_share)
        if share_table:
            histogram.share_table(self._discount, rng)
        else:
            histogram.create_table()
            self._tables += 1
        self._customers += 1
        return 0 if share_table else 1

    def decrement(self, dish, rng):
        '''
        Remove a random customer eating dish.
        Returns -1 if a table was closed, otherwise 0.
        '''
        histogram = self._dishes.get(dish)
        if histogram is None:
            raise ContractViolation(
                'Cannot decrement {!r}: no seated customers'.format(dish))
        if histogram.num_customers() == 1:
            del self._dishes[dish]
            self._tables -= 1
            self._customers -= 1
            return -1
        delta = histogram.remove_customer(rng)
        self._customers -= 1
        if delta:
            self._tables -= 1
        return delta

    def prob(self, dish, p0):
        '''
        Predictive probability of dish given base probability p0.
        '''
        r = self._tables * self._discount + self._strength
        histogram = self._dishes.get(dish)
        if histogram is None:
            if not self._customers + self._strength:
                # empty restaurant with zero strength: draw from the base
                return p0
            return r * p0 / (self._customers + self._strength)
        else:
            return (
                histogram.num_customers() -
                self._discount * histogram.num_tables() +
                r * p0) / (self._customers + self._strength)

    def log_likelihood(self, discount=None, strength=None):
        '''
        Log probability of the seating arrangement, excluding base
        probabilities, plus the log hyperprior densities. Unspecified
        hyperparameters default to the current values.
        '''
        if discount is None:
            discount = self._discount
        if strength is None:
            strength = self._strength
        lp = 0.0
        if self.discount_prior is not None:
            lp += log_beta_density(discount, *self.discount_prior)
        if self.strength_prior is not None:
            lp += log_gamma_density(strength + discount, *self.strength_prior)
        if self._customers:
            if discount > 0.0:
                lp += self._log_likelihood_pitman_yor(discount, strength)
            elif discount == 0.0:
                lp += self._log_likelihood_dirichlet(strength)
            else:
                raise ContractViolation(
                    'discount less than 0 detected: {}'.format(discount))
        if not numpy.isfinite(lp):
            raise ContractViolation(
                'Non-finite log likelihood {} at d={}, c={}'.format(
                    lp,
                    discount,
                    strength))
        return float(lp)

    def _log_likelihood_pitman_yor(self, discount, strength):
        lp = 0.0
        if strength:
            lp += gammaln(strength) - gammaln(strength / discount)
        lp += (
            -gammaln(strength + self._customers) +
            self._tables * numpy.log(discount) +
            gammaln(strength / discount + self._tables))
        bins = [
            size_count
            for histogram in self._dishes.values()
            for size_count in histogram
        ]
        sizes, counts = numpy.array(bins, dtype=float).T
        per_table = gammaln(sizes - discount) - gammaln(1.0 - discount)
        lp += numpy.dot(per_table, counts)
        return lp

    def _log_likelihood_dirichlet(self, strength):
        lp = (
            gammaln(strength) +
            self._tables * numpy.log(strength) -
            gammaln(strength + self._customers))
        lp += sum(
            gammaln(histogram.num_tables())
            for histogram in self._dishes.values())
        return lp

    def _resample_strength(self, rng, inner_steps):
        strength = slice_sampler1d(
            lambda strength: self.log_likelihood(self._discount, strength),
            self._strength,
            rng,
            lower=-self._discount,
            upper=INF,
            step_width=0.0,
            burn_in=inner_steps,
            max_iterations=100 * inner_steps)
        self.set_strength(strength)

    def _resample_discount(self, rng, inner_steps):
        discount = slice_sampler1d(
            lambda discount: self.log_likelihood(discount, self._strength),
            self._discount,
            rng,
            lower=max(TINY, -self._strength),
            upper=1.0,
            step_width=0.0,
            burn_in=inner_steps,
            max_iterations=100 * inner_steps)
        self.set_discount(discount)

    def resample_hyperparameters(self, rng, outer_loops=5, inner_steps=10):
        '''
        Slice-sample the hyperparameters that have priors, alternating
        strength and discount, then finish with one more strength update.
        '''
        if not (self.has_discount_prior() or self.has_strength_prior()):
            raise ContractViolation(
                'Cannot resample hyperparameters without a prior')
        if not self._customers:
            return
        for _ in range(outer_loops):
            if self.has_strength_prior():
                self._resample_strength(rng, inner_steps)
            if self.has_discount_prior():
                self._resample_discount(rng, inner_steps)
        self._resample_strength(rng, inner_steps)
        LOG('resampled PYP(d={},c={})'.format(
            self._discount,
            self._strength), verbosity=2)

    def __str__(self):
        lines = ['PYP(d={},c={}) customers={}'.format(
            self._discount,
            self._strength,
            self._customers)]
        for dish, histogram in self._dishes.items():
            lines.append('{} : {}'.format(dish, histogram))
        return '\n'.join(lines)

    def dump(self, out=None):
        if out is None:
            out = sys.stdout
        out.write('{}\n'.format(self))
