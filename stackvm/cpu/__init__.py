# Machine state + byte ALU
