from .Backend import backend


def glorot_uniform(fan_out, fan_in):
    # Glorot/Xavier uniform: each entry drawn from U(-sqrt(6/(in+out)), +sqrt(6/(in+out)))
    limit = backend.sqrt(6.0 / (fan_in + fan_out))
    return (2.0 * backend.random.rand(fan_out, fan_in) - 1.0) * limit
