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

import pycrp.config
import pycrp.hyperprior
from pycrp.restaurant import Restaurant
from pycrp.rng import RandomSource
from pycrp.util import LOG, parsable


def generate(
        dish_count=100,
        customer_count=1000,
        discount=0.5,
        strength=1.0,
        seed=0,
        restaurant=None):
    '''
    Seat customer_count customers, drawing each customer's dish from the
    restaurant's predictive distribution over a uniform base distribution
    on dish_count dishes.
    '''
    if restaurant is None:
        restaurant = Restaurant(discount, strength)
    rng = RandomSource(seed)
    dishes = list(range(dish_count))
    p0 = 1.0 / dish_count
    for _ in range(customer_count):
        weights = [restaurant.prob(dish, p0) for dish in dishes]
        dish = dishes[rng.sample_discrete(weights)]
        restaurant.increment(dish, p0, rng)
    return restaurant


def _make_restaurant(config_in, discount, strength):
    if config_in is None:
        config = {}
    else:
        config = pycrp.config.config_load(config_in)
    pycrp.config.fill_in_defaults(config)
    if discount is not None:
        config['restaurant']['discount'] = float(discount)
    if strength is not None:
        config['restaurant']['strength'] = float(strength)
    return config, Restaurant.from_config(config)


@parsable.command
def simulate(
        dish_count=100,
        customer_count=1000,
        discount=None,
        strength=None,
        config_in=None,
        resample_count=0,
        dump=0):
    '''
    Generate a synthetic seating, print a summary and optionally resample
    hyperparameters resample_count times.
    '''
    config, restaurant = _make_restaurant(config_in, discount, strength)
    seed = int(config['seed'])
    LOG('seating {} customers'.format(customer_count))
    generate(
        dish_count=int(dish_count),
        customer_count=int(customer_count),
        seed=seed,
        restaurant=restaurant)
    if int(dump):
        restaurant.dump()
    print('dishes = {}'.format(len(restaurant)))
    print('tables = {}'.format(restaurant.num_tables()))
    print('customers = {}'.format(restaurant.num_customers()))
    print('log_likelihood = {}'.format(restaurant.log_likelihood()))

    rng = RandomSource(seed + 1)
    hyper = config['hyper']
    for i in range(int(resample_count)):
        restaurant.resample_hyperparameters(
            rng,
            outer_loops=int(hyper['outer_loops']),
            inner_steps=int(hyper['inner_steps']))
        print('{}: discount = {}, strength = {}, log_likelihood = {}'.format(
            i,
            restaurant.discount,
            restaurant.strength,
            restaurant.log_likelihood()))
    return restaurant


@parsable.command
def scan(
        dish_count=100,
        customer_count=1000,
        discount=None,
        strength=None,
        config_in=None,
        top=10):
    '''
    Generate a synthetic seating and print the best-scoring points of the
    default Pitman-Yor hyperparameter grid.
    '''
    config, restaurant = _make_restaurant(config_in, discount, strength)
    generate(
        dish_count=int(dish_count),
        customer_count=int(customer_count),
        seed=int(config['seed']),
        restaurant=restaurant)
    scores = pycrp.hyperprior.grid_scores(restaurant)
    scores.sort(key=lambda pair: pair[1], reverse=True)
    for point, score in scores[:int(top)]:
        print('discount = {:0.4f}, strength = {:0.4f}, score = {:0.4f}'.format(
            point['discount'],
            point['strength'],
            score))
    return scores
