"""
Loopback Chat Example
=====================

Runs the client against the in-memory LoopbackTransport, so no broker is
needed.

This example demonstrates:
- Registering handlers with exact and '+' wildcard channels
- The decorator form of register()
- Handler fault isolation with an on_error hook
"""

from emitterclient import EmitterClient, ClientConfig, LoopbackTransport


def report(error):
    print('[chat] handler failed on %s: %s' % (error.topic, error.cause))


config = ClientConfig(default_key='demo-key', log_level='DEBUG')
client = EmitterClient(LoopbackTransport(), config, on_error=report)
client.connect()


@client.on('chat/lobby')
def lobby(topic, payload):
    print('[lobby] %s' % payload.decode('utf-8'))


@client.on('chat/+')
def every_room(topic, payload):
    print('[any room] %s -> %s' % (topic, payload.decode('utf-8')))


@client.on('chat/broken')
def broken(topic, payload):
    raise ValueError('cannot parse %r' % payload)


client.publish('chat/lobby', 'hello lobby')
client.publish('chat/kitchen', 'dinner is ready')
client.publish('chat/broken', 'still reaches chat/+')

client.unregister('chat/+')
client.publish('chat/kitchen', 'nobody hears this')

client.disconnect()
